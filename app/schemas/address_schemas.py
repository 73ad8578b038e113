from pydantic import BaseModel

ADDRESS_FIELDS = ("door_number", "street", "city", "state", "pincode")


class AddressForm(BaseModel):
    # blanks are reported by the order composer, not rejected here
    door_number: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""

    def missing_fields(self):
        return [
            name for name in ADDRESS_FIELDS
            if not (getattr(self, name) or "").strip()
        ]


class ShippingAddress(BaseModel):
    door_number: str
    street: str
    city: str
    state: str
    pincode: str

    model_config = {"frozen": True}
