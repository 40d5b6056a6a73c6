"""Product catalog rows joined by the analytics top-products query."""

from tortoise import fields
from ...common.models import TimestampMixin, generate_ksuid


class Product(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    title = fields.CharField(max_length=255)
    base_price = fields.FloatField(
        default=0.0, description="Base cost before the reseller's markup"
    )
    is_active = fields.BooleanField(default=True)

    order_items: fields.ReverseRelation["OrderItem"]

    def __str__(self):
        return f"{self.title} (${self.base_price:.2f})"

    class Meta:
        table = "products"
