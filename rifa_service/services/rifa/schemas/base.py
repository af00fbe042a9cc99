from flask_marshmallow import Schema
from marshmallow.fields import Integer, Nested, String

from rifa_service.services.common.schemas import AddressField, HexField, ServiceSchema


class ReceiptSchema(Schema):
    """JSON object representing the receipt of a mined transaction.

    Parameters:

        - hash (hex string)
        - blockNumber (integer)
        - from (address)
        - to (address, `null` for deployments)
        - status (integer)
        - gasUsed (integer)
    """

    hash = HexField(attribute="transactionHash")
    blockNumber = Integer()
    sender = AddressField(attribute="from", data_key="from")
    to = AddressField(allow_none=True)
    status = Integer()
    gasUsed = Integer()


class TransactionResponseSchema(ServiceSchema):
    """Base schema for endpoints sending a transaction.

    Dump-only parameters:

        - message (string)
        - tx (:class:`ReceiptSchema`)
    """

    message = String(required=True, dump_only=True)
    tx = Nested(ReceiptSchema, required=True, dump_only=True)
