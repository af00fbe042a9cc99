from rifa_service.services.common.schemas import AddressField, TokenAmountField
from rifa_service.services.rifa.schemas.base import TransactionResponseSchema


class ApproveSchema(TransactionResponseSchema):
    """POST /approve

    load-only parameters:

        - rifaAddress (address) - the raffle allowed to spend the tokens.
        - amount (decimal string or number)

    dump-only parameters:

        - message (string)
        - tx (:class:`ReceiptSchema`)
    """

    raffle_address = AddressField(data_key="rifaAddress", required=True, load_only=True)
    amount = TokenAmountField(required=True, load_only=True)
