from enum import Enum

from tortoise import fields

from ...common.models import TimestampMixin, generate_ksuid


class UserRole(str, Enum):
    RESELLER = "reseller"
    CUSTOMER = "customer"
    ADMIN = "admin"


class User(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(max_length=27, unique=True, default=generate_ksuid, db_index=True)
    username = fields.CharField(max_length=100, unique=True, db_index=True)
    email = fields.CharField(max_length=255, unique=True, db_index=True)
    hashed_password = fields.CharField(max_length=255)
    role = fields.CharEnumField(UserRole, max_length=50, default=UserRole.CUSTOMER)
    is_active = fields.BooleanField(default=True)

    store: fields.BackwardOneToOneRelation["Store"]
    placed_orders: fields.ReverseRelation["Order"]
    resold_orders: fields.ReverseRelation["Order"]

    def __str__(self):
        return f"{self.username} ({self.role})"

    class Meta:
        table = "users"
