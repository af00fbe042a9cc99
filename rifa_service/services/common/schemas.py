from decimal import Decimal

import flask
from eth_utils import encode_hex, is_address, to_checksum_address
from flask_marshmallow import Schema
from marshmallow import EXCLUDE
from marshmallow.fields import Field, String


class ServiceSchema(Schema):
    """A :class:`.Schema` providing a convenience method for validation and deserialization.

    Unknown keys in the input are ignored.
    """

    class Meta:
        unknown = EXCLUDE

    def validate_and_deserialize(self, data_obj) -> dict:
        """Validate `data_obj` and deserialize its fields to native python objects.

        If validation fails, this raises a :exc:`werkzeug.exceptions.BadRequest`,
        ending the request sequence.

        :raises werkzeug.exceptions.BadRequest:
            if validating the `data_obj` did not succeed.
        """
        if data_obj is None:
            flask.abort(400, "Request body must be a JSON object!")
        errors = self.validate(data_obj)
        if errors:
            flask.abort(400, str(errors))
        return self.load(data_obj)


class AddressField(String):
    """A field for (de)serializing account addresses, checksummed on the way in and out."""

    default_error_messages = {
        "empty": "Must not be empty!",
        "not_address": "Must be a valid account address!",
    }

    def _deserialize(self, value, attr, data, **kwargs) -> str:
        if not value:
            raise self.make_error("empty")

        address = super(AddressField, self)._deserialize(value, attr, data, **kwargs)
        if not is_address(address):
            raise self.make_error("not_address")
        return to_checksum_address(address)

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None:
            return None
        return to_checksum_address(value)


class TokenAmountField(Field):
    """A decimal token amount, given either as a string or a JSON number.

    The value is loaded as a :class:`str`; converting it to the token's fixed-point
    representation is left to the precondition checks, which reject amounts that
    can not be represented exactly.
    """

    default_error_messages = {
        "invalid": "Must be a decimal number given as string or number!",
        "empty": "Must not be empty!",
    }

    def _deserialize(self, value, attr, data, **kwargs) -> str:
        if isinstance(value, bool) or not isinstance(value, (str, int, float, Decimal)):
            raise self.make_error("invalid")
        value = str(value).strip()
        if not value:
            raise self.make_error("empty")
        return value

    def _serialize(self, value, attr, obj, **kwargs):
        return None if value is None else str(value)


class HexField(String):
    """Serializes :class:`bytes` (e.g. transaction hashes) to `0x`-prefixed hex strings."""

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None:
            return None
        if isinstance(value, (bytes, bytearray)):
            value = encode_hex(value)
        return super(HexField, self)._serialize(value, attr, obj, **kwargs)
