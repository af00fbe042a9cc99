"""REST service acting on raffles and the RealDigital token with the operator wallet.

Every transaction is signed by the operator wallet configured at startup, and every
request waits until its transaction is mined before responding. Nothing is retried:
failures are reported to the caller, who decides whether to resubmit.

Creating a raffle, bound to the configured RealDigital token::

    POST /criar-rifa

        {"maxEntradas": 10, "valorEntrada": "5"}

    200 OK

        {"message": "Rifa criada com sucesso!", "rifaAddress": "0x..."}

Before entering a raffle, it must be allowed to spend the entries' price::

    POST /approve

        {"rifaAddress": "0x...", "amount": "10.5"}

    200 OK

        {"message": "Aprovação realizada com sucesso", "tx": {"hash": "0x...", ...}}

Entering the raffle, only after the approval was confirmed::

    POST /entrar

        {"rifaAddress": "0x...", "quantidadeRifas": 2}

    200 OK

        {"message": "Você entrou na rifa com sucesso", "tx": {"hash": "0x...", ...}}

    400 Bad Request

        {"error": "O sorteio dessa rifa ja foi realizado"}

Reading a raffle's state::

    GET /rifa/<address>/entradas

        {"entradas": [...]}

    GET /rifa/<address>/tokens-acumulados

        {"tokensAcumulados": "1.5"}

All errors are returned as ``{"error": <message>}``.
"""
