from marshmallow import Schema, fields, validate, post_load, ValidationError
from stockroom.models import MovementType, RequestStatus, UserRole


class ProductRequestSchema(Schema):
    """Schema for creating products"""
    name = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    sku = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    category = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    vendor = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    quantity = fields.Int(strict=True, validate=validate.Range(min=0), load_default=0)
    total_quantity = fields.Int(strict=True, validate=validate.Range(min=0), allow_none=True, load_default=None)
    reorder_threshold = fields.Int(strict=True, validate=validate.Range(min=0), load_default=0)
    cost_price = fields.Decimal(required=True, places=2, validate=validate.Range(min=0))
    selling_price = fields.Decimal(required=True, places=2, validate=validate.Range(min=0))
    description = fields.Str(allow_none=True)

    @post_load
    def validate_stock_levels(self, data, **kwargs):
        total_quantity = data.get('total_quantity')
        if total_quantity is not None and data.get('quantity', 0) > total_quantity:
            raise ValidationError('Quantity cannot exceed total quantity')

        return data


class ProductUpdateSchema(Schema):
    """Schema for updating products; stock fields are accepted so the service can refuse them"""
    name = fields.Str(validate=validate.Length(min=1, max=255))
    sku = fields.Str(validate=validate.Length(min=1, max=100))
    category = fields.Str(validate=validate.Length(min=1, max=100))
    vendor = fields.Str(validate=validate.Length(min=1, max=255))
    reorder_threshold = fields.Int(strict=True, validate=validate.Range(min=0))
    cost_price = fields.Decimal(places=2, validate=validate.Range(min=0))
    selling_price = fields.Decimal(places=2, validate=validate.Range(min=0))
    description = fields.Str(allow_none=True)
    quantity = fields.Int()
    total_quantity = fields.Int()


class ProductResponseSchema(Schema):
    """Schema for product responses"""
    id = fields.Int(dump_only=True)
    name = fields.Str()
    sku = fields.Str()
    category = fields.Str()
    vendor = fields.Str()
    quantity = fields.Int()
    total_quantity = fields.Int()
    reorder_threshold = fields.Int()
    cost_price = fields.Decimal(places=2, as_string=True)
    selling_price = fields.Decimal(places=2, as_string=True)
    description = fields.Str(allow_none=True)
    is_low_stock = fields.Boolean(dump_only=True)
    stock_status = fields.Str(dump_only=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)


class ProductSearchSchema(Schema):
    """Schema for product list query parameters"""
    category = fields.Str(validate=validate.Length(min=1))
    search = fields.Str(validate=validate.Length(min=1))


class StockInRequestSchema(Schema):
    """Schema for recording received stock"""
    product_id = fields.Int(required=True, strict=True)
    quantity = fields.Int(required=True, strict=True, validate=validate.Range(min=1))
    supplier = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    notes = fields.Str(validate=validate.Length(max=1000), allow_none=True)
    attachment_url = fields.Str(validate=validate.Length(max=500), allow_none=True)


class StockInResponseSchema(Schema):
    """Schema for stock-in responses"""
    id = fields.Int(dump_only=True)
    product_id = fields.Int()
    quantity = fields.Int()
    supplier = fields.Str()
    notes = fields.Str(allow_none=True)
    attachment_url = fields.Str(allow_none=True)
    created_by = fields.Int()
    created_at = fields.DateTime(dump_only=True)


class StockInSearchSchema(Schema):
    product_id = fields.Int()


class StockOutRequestSchema(Schema):
    """Schema for opening stock-out requests"""
    product_id = fields.Int(required=True, strict=True)
    quantity = fields.Int(required=True, strict=True, validate=validate.Range(min=1))
    purpose = fields.Str(required=True, validate=validate.Length(min=1))


class RejectRequestSchema(Schema):
    reason = fields.Str(required=True, validate=validate.Length(min=1))


class StockOutResponseSchema(Schema):
    """Schema for stock-out request responses"""
    id = fields.Int(dump_only=True)
    product_id = fields.Int()
    requester_id = fields.Int()
    quantity = fields.Int()
    purpose = fields.Str()
    status = fields.Enum(RequestStatus, by_value=True)
    reviewed_by = fields.Int(allow_none=True)
    reviewed_at = fields.DateTime(allow_none=True)
    fulfilled_by = fields.Int(allow_none=True)
    fulfilled_at = fields.DateTime(allow_none=True)
    rejection_reason = fields.Str(allow_none=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)


class StockOutSearchSchema(Schema):
    """Schema for stock-out list query parameters"""
    status = fields.Enum(RequestStatus, by_value=True)
    requester_id = fields.Int()


class StockMovementResponseSchema(Schema):
    """Schema for stock movement responses"""
    id = fields.Int(dump_only=True)
    product_id = fields.Int()
    movement_type = fields.Enum(MovementType, by_value=True)
    quantity = fields.Int()
    reference_id = fields.Int(allow_none=True)
    user_id = fields.Int()
    notes = fields.Str(allow_none=True)
    created_at = fields.DateTime(dump_only=True)


class MovementSearchSchema(Schema):
    """Schema for movement search parameters"""
    product_id = fields.Int()
    movement_type = fields.Enum(MovementType, by_value=True)
    page = fields.Int(validate=validate.Range(min=1), load_default=1)
    per_page = fields.Int(validate=validate.Range(min=1))


class UserResponseSchema(Schema):
    id = fields.Int(dump_only=True)
    username = fields.Str()
    full_name = fields.Str()
    email = fields.Email()
    role = fields.Enum(UserRole, by_value=True)
    is_active = fields.Boolean()
    created_at = fields.DateTime(dump_only=True)


class DashboardStatsSchema(Schema):
    total_products = fields.Int()
    low_stock_count = fields.Int()
    total_stock_value = fields.Int()
    active_users = fields.Int()


class CategoryValueSchema(Schema):
    category = fields.Str()
    value = fields.Int()


class ActivitySchema(Schema):
    """Schema for recent activity feed items"""
    id = fields.Int()
    type = fields.Str()
    product_id = fields.Int()
    user_id = fields.Int()
    quantity = fields.Int()
    created_at = fields.DateTime()


class ActivitySearchSchema(Schema):
    limit = fields.Int(validate=validate.Range(min=1, max=100))
