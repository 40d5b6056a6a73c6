import copy

from tortoise import fields

from ...common.models import TimestampMixin, generate_ksuid

DEFAULT_STORE_SETTINGS = {
    "minimumMarkup": 0,
    "maximumMarkup": 100,
    "defaultMarkup": 20,
    "currency": "USD",
    "autoFulfillOrders": False,
    "notifyByEmail": True,
    "notifyOnNewOrder": True,
    "lowBalanceThreshold": 0,
}


def default_store_settings() -> dict:
    return copy.deepcopy(DEFAULT_STORE_SETTINGS)


class Store(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    name = fields.CharField(max_length=255)

    reseller: fields.OneToOneRelation["User"] = fields.OneToOneField(
        "models.User", related_name="store", on_delete=fields.CASCADE
    )
    settings = fields.JSONField(default=default_store_settings)

    def __str__(self):
        return f"Store {self.name} ({self.public_id})"

    class Meta:
        table = "stores"
