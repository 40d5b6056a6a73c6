from enum import Enum

from tortoise import fields
from tortoise.validators import MinValueValidator

from ...common.models import TimestampMixin, generate_ksuid


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class Order(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    order_number = fields.CharField(max_length=50, unique=True)

    customer: fields.ForeignKeyRelation["User"] = fields.ForeignKeyField(
        "models.User", related_name="placed_orders", on_delete=fields.RESTRICT
    )
    reseller: fields.ForeignKeyNullableRelation["User"] = fields.ForeignKeyField(
        "models.User", related_name="resold_orders", on_delete=fields.SET_NULL, null=True
    )

    total = fields.FloatField(description="Amount charged to the customer")
    cost = fields.FloatField(default=0.0, description="Cost basis, profit = total - cost")

    status = fields.CharEnumField(OrderStatus, max_length=20, default=OrderStatus.PENDING)
    payment_status = fields.CharEnumField(
        PaymentStatus, max_length=20, default=PaymentStatus.PENDING
    )

    # Payment record, filled in once a provider confirms the charge
    payment_provider = fields.CharField(max_length=50, null=True)
    payment_transaction_id = fields.CharField(max_length=255, null=True)
    payment_amount = fields.FloatField(null=True)
    payment_currency = fields.CharField(max_length=3, null=True)
    payment_id = fields.CharField(max_length=255, null=True)

    items: fields.ReverseRelation["OrderItem"]

    @property
    def profit(self) -> float:
        return self.total - self.cost

    def __str__(self):
        return f"Order {self.order_number} ({self.public_id}) - Status: {self.status.value}"

    class Meta:
        table = "orders"


class OrderItem(TimestampMixin):
    id = fields.IntField(primary_key=True)

    order: fields.ForeignKeyRelation[Order] = fields.ForeignKeyField(
        "models.Order", related_name="items", on_delete=fields.CASCADE
    )
    product: fields.ForeignKeyRelation["Product"] = fields.ForeignKeyField(
        "models.Product", related_name="order_items", on_delete=fields.RESTRICT
    )

    quantity = fields.IntField(validators=[MinValueValidator(1)])
    price = fields.FloatField(description="Unit price at the time of purchase")
    sub_product_name = fields.CharField(max_length=255)
    metadata = fields.JSONField(null=True)

    def __str__(self):
        return f"{self.quantity} x {self.sub_product_name} @ {self.price:.2f}"

    class Meta:
        table = "order_items"
