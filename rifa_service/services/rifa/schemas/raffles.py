from marshmallow.fields import Integer, Raw, String

from rifa_service.services.common.schemas import AddressField, ServiceSchema, TokenAmountField
from rifa_service.services.rifa.schemas.base import TransactionResponseSchema


class CreateRaffleSchema(ServiceSchema):
    """POST /criar-rifa

    load-only parameters:

        - maxEntradas (integer)
        - valorEntrada (decimal string or number)

    dump-only parameters:

        - message (string)
        - rifaAddress (address)
    """

    # Deserialization fields.
    max_entries = Integer(data_key="maxEntradas", required=True, load_only=True, strict=True)
    entry_price = TokenAmountField(data_key="valorEntrada", required=True, load_only=True)

    # Serialization fields.
    message = String(required=True, dump_only=True)
    raffle_address = AddressField(data_key="rifaAddress", required=True, dump_only=True)


class EnterRaffleSchema(TransactionResponseSchema):
    """POST /entrar

    load-only parameters:

        - rifaAddress (address)
        - quantidadeRifas (integer)

    dump-only parameters:

        - message (string)
        - tx (:class:`ReceiptSchema`)
    """

    raffle_address = AddressField(data_key="rifaAddress", required=True, load_only=True)
    entry_count = Integer(data_key="quantidadeRifas", required=True, load_only=True, strict=True)


class RaffleEntriesSchema(ServiceSchema):
    """GET /rifa/<address>/entradas

    dump-only parameters:

        - entradas (the raffle's entries as returned by the contract)
    """

    entries = Raw(data_key="entradas", required=True, dump_only=True)


class AccumulatedTokensSchema(ServiceSchema):
    """GET /rifa/<address>/tokens-acumulados

    dump-only parameters:

        - tokensAcumulados (decimal string, up to 18 fractional digits)
    """

    accumulated_tokens = String(data_key="tokensAcumulados", required=True, dump_only=True)
