"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC – Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Database models for the multi-tenant POS: restaurants, users, menu,
tables, customer sessions, orders and payments. Every restaurant-scoped
row carries a restaurant_id.
"""

from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

ROLE_ADMIN = "ADMIN"
ROLE_STAFF = "STAFF"

SESSION_STATUSES = (
    "WAITING", "SEATED", "ORDERING", "ORDERED",
    "SERVING", "DINING", "BILLING", "COMPLETED",
)
# A table is occupied while one of its sessions is in one of these.
ACTIVE_SESSION_STATUSES = ("SEATED", "ORDERING", "ORDERED", "SERVING", "DINING", "BILLING")

ORDER_STATUSES = ("PENDING", "CONFIRMED", "PREPARING", "READY", "SERVING", "DELIVERED", "CANCELLED")
MODIFIABLE_ORDER_STATUSES = ("PENDING", "CONFIRMED", "PREPARING", "READY", "SERVING", "DELIVERED")
DELETABLE_ORDER_STATUSES = ("PENDING", "CANCELLED")

PAYMENT_METHODS = ("CASH", "QR", "CREDIT_CARD", "DEBIT_CARD")


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _iso(value):
    return value.isoformat() if value else None


class Restaurant(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text)
    address = db.Column(db.String(255))
    phone = db.Column(db.String(40))
    email = db.Column(db.String(120))
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    users = db.relationship("User", backref="restaurant", lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "address": self.address,
            "phone": self.phone,
            "email": self.email,
            "is_active": self.is_active,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }

    def summary(self):
        return {"id": self.id, "name": self.name, "address": self.address, "phone": self.phone}


class User(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    name = db.Column(db.String(120))
    image = db.Column(db.String(255))
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), default=ROLE_ADMIN, nullable=False)
    restaurant_id = db.Column(db.Integer, db.ForeignKey("restaurant.id"), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "image": self.image,
            "role": self.role,
            "restaurant_id": self.restaurant_id,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }

    def summary(self):
        return {"id": self.id, "name": self.name, "email": self.email}


class Category(db.Model):
    __table_args__ = (db.UniqueConstraint("restaurant_id", "name", name="uq_category_restaurant_name"),)

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    sort_order = db.Column(db.Integer, default=0, nullable=False)
    restaurant_id = db.Column(db.Integer, db.ForeignKey("restaurant.id"), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    menu_items = db.relationship("MenuItem", backref="category", lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "is_active": self.is_active,
            "sort_order": self.sort_order,
            "restaurant_id": self.restaurant_id,
            "menu_item_count": len(self.menu_items),
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


class MenuItem(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text)
    price = db.Column(db.Float, nullable=False)
    image = db.Column(db.String(255))
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    is_available = db.Column(db.Boolean, default=True, nullable=False)
    sort_order = db.Column(db.Integer, default=0, nullable=False)
    category_id = db.Column(db.Integer, db.ForeignKey("category.id"), nullable=False)
    restaurant_id = db.Column(db.Integer, db.ForeignKey("restaurant.id"), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    selections = db.relationship(
        "MenuItemSelection", backref="menu_item", cascade="all, delete-orphan",
        order_by="MenuItemSelection.sort_order", lazy=True,
    )

    def to_dict(self, include_category=True, include_selections=True, available_options_only=False):
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "image": self.image,
            "is_active": self.is_active,
            "is_available": self.is_available,
            "sort_order": self.sort_order,
            "category_id": self.category_id,
            "restaurant_id": self.restaurant_id,
        }
        if include_category:
            data["category"] = {"id": self.category.id, "name": self.category.name,
                                "description": self.category.description,
                                "sort_order": self.category.sort_order}
        if include_selections:
            data["selections"] = [s.to_dict(available_only=available_options_only) for s in self.selections]
        return data


class MenuItemSelection(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    menu_item_id = db.Column(db.Integer, db.ForeignKey("menu_item.id"), nullable=False)
    name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text)
    is_required = db.Column(db.Boolean, default=False, nullable=False)
    allow_multiple = db.Column(db.Boolean, default=False, nullable=False)
    sort_order = db.Column(db.Integer, default=0, nullable=False)

    options = db.relationship(
        "SelectionOption", backref="selection", cascade="all, delete-orphan",
        order_by="SelectionOption.sort_order", lazy=True,
    )

    def to_dict(self, available_only=False):
        options = [o for o in self.options if o.is_available or not available_only]
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "is_required": self.is_required,
            "allow_multiple": self.allow_multiple,
            "sort_order": self.sort_order,
            "options": [o.to_dict() for o in options],
        }


class SelectionOption(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    selection_id = db.Column(db.Integer, db.ForeignKey("menu_item_selection.id"), nullable=False)
    name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text)
    price_add = db.Column(db.Float, default=0.0, nullable=False)
    is_available = db.Column(db.Boolean, default=True, nullable=False)
    sort_order = db.Column(db.Integer, default=0, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price_add": self.price_add,
            "is_available": self.is_available,
            "sort_order": self.sort_order,
        }


class Table(db.Model):
    __table_args__ = (db.UniqueConstraint("restaurant_id", "number", name="uq_table_restaurant_number"),)

    id = db.Column(db.Integer, primary_key=True)
    number = db.Column(db.String(20), nullable=False)
    name = db.Column(db.String(120))
    capacity = db.Column(db.Integer, default=4, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    sort_order = db.Column(db.Integer, default=0, nullable=False)
    grid_x = db.Column(db.Integer, default=0, nullable=False)
    grid_y = db.Column(db.Integer, default=0, nullable=False)
    grid_width = db.Column(db.Integer, default=2, nullable=False)
    grid_height = db.Column(db.Integer, default=2, nullable=False)
    restaurant_id = db.Column(db.Integer, db.ForeignKey("restaurant.id"), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    restaurant = db.relationship("Restaurant", lazy=True)

    def active_session(self):
        return (CustomerSession.query
                .filter(CustomerSession.table_id == self.id,
                        CustomerSession.status.in_(ACTIVE_SESSION_STATUSES))
                .order_by(CustomerSession.check_in_time.desc())
                .first())

    def to_dict(self):
        return {
            "id": self.id,
            "number": self.number,
            "name": self.name,
            "capacity": self.capacity,
            "is_active": self.is_active,
            "sort_order": self.sort_order,
            "grid_x": self.grid_x,
            "grid_y": self.grid_y,
            "grid_width": self.grid_width,
            "grid_height": self.grid_height,
            "restaurant_id": self.restaurant_id,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }

    def summary(self):
        return {"id": self.id, "number": self.number, "name": self.name}


class CustomerSession(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    customer_name = db.Column(db.String(120))
    customer_phone = db.Column(db.String(40))
    customer_email = db.Column(db.String(120))
    party_size = db.Column(db.Integer, nullable=False)
    notes = db.Column(db.Text)
    status = db.Column(db.String(20), default="WAITING", nullable=False)
    check_in_time = db.Column(db.DateTime, default=utcnow)
    seated_time = db.Column(db.DateTime)
    check_out_time = db.Column(db.DateTime)
    table_id = db.Column(db.Integer, db.ForeignKey("table.id"), nullable=True)
    waiter_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=True)
    restaurant_id = db.Column(db.Integer, db.ForeignKey("restaurant.id"), nullable=False)

    table = db.relationship("Table", backref="sessions", lazy=True)
    waiter = db.relationship("User", lazy=True)
    orders = db.relationship("Order", backref="session", lazy=True, order_by="Order.ordered_at")

    def to_dict(self, include_orders=False, include_waiter=False):
        data = {
            "id": self.id,
            "customer_name": self.customer_name,
            "customer_phone": self.customer_phone,
            "customer_email": self.customer_email,
            "party_size": self.party_size,
            "notes": self.notes,
            "status": self.status,
            "check_in_time": _iso(self.check_in_time),
            "seated_time": _iso(self.seated_time),
            "check_out_time": _iso(self.check_out_time),
            "table_id": self.table_id,
            "waiter_id": self.waiter_id,
            "restaurant_id": self.restaurant_id,
            "table": self.table.summary() if self.table else None,
        }
        if include_waiter:
            data["waiter"] = self.waiter.summary() if self.waiter else None
        if include_orders:
            data["orders"] = [o.to_dict(include_menu_items=False) for o in self.orders]
        return data

    def summary(self):
        return {"id": self.id, "customer_name": self.customer_name, "party_size": self.party_size}


class Order(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    order_number = db.Column(db.String(40), unique=True, nullable=False)
    status = db.Column(db.String(20), default="PENDING", nullable=False)
    customer_name = db.Column(db.String(120))
    customer_phone = db.Column(db.String(40))
    customer_email = db.Column(db.String(120))
    total_amount = db.Column(db.Float, default=0.0, nullable=False)
    notes = db.Column(db.Text)
    ordered_at = db.Column(db.DateTime, default=utcnow)
    preparing_at = db.Column(db.DateTime)
    ready_at = db.Column(db.DateTime)
    served_at = db.Column(db.DateTime)
    restaurant_id = db.Column(db.Integer, db.ForeignKey("restaurant.id"), nullable=False)
    session_id = db.Column(db.Integer, db.ForeignKey("customer_session.id"), nullable=True)
    table_id = db.Column(db.Integer, db.ForeignKey("table.id"), nullable=True)
    waiter_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=True)

    table = db.relationship("Table", lazy=True)
    waiter = db.relationship("User", lazy=True)
    items = db.relationship("OrderItem", backref="order", cascade="all, delete-orphan",
                            order_by="OrderItem.id", lazy=True)

    def to_dict(self, include_menu_items=True):
        return {
            "id": self.id,
            "order_number": self.order_number,
            "status": self.status,
            "customer_name": self.customer_name,
            "customer_phone": self.customer_phone,
            "customer_email": self.customer_email,
            "total_amount": self.total_amount,
            "notes": self.notes,
            "ordered_at": _iso(self.ordered_at),
            "preparing_at": _iso(self.preparing_at),
            "ready_at": _iso(self.ready_at),
            "served_at": _iso(self.served_at),
            "restaurant_id": self.restaurant_id,
            "session_id": self.session_id,
            "table_id": self.table_id,
            "waiter_id": self.waiter_id,
            "table": self.table.summary() if self.table else None,
            "session": self.session.summary() if self.session else None,
            "waiter": {"id": self.waiter.id, "name": self.waiter.name} if self.waiter else None,
            "items": [i.to_dict(include_menu_item=include_menu_items) for i in self.items],
        }


class OrderItem(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("order.id"), nullable=False)
    menu_item_id = db.Column(db.Integer, db.ForeignKey("menu_item.id"), nullable=False)
    quantity = db.Column(db.Integer, default=1, nullable=False)
    price = db.Column(db.Float, nullable=False)
    notes = db.Column(db.Text)
    selections = db.Column(db.JSON)

    menu_item = db.relationship("MenuItem", lazy=True)

    def to_dict(self, include_menu_item=True):
        data = {
            "id": self.id,
            "order_id": self.order_id,
            "menu_item_id": self.menu_item_id,
            "quantity": self.quantity,
            "price": self.price,
            "notes": self.notes,
            "selections": self.selections,
        }
        if include_menu_item:
            data["menu_item"] = self.menu_item.to_dict(include_category=False)
        return data


class Payment(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    payment_number = db.Column(db.String(20), nullable=False)
    session_id = db.Column(db.Integer, db.ForeignKey("customer_session.id"), nullable=False)
    restaurant_id = db.Column(db.Integer, db.ForeignKey("restaurant.id"), nullable=False)

    # snapshot of the session, table and restaurant at billing time
    customer_name = db.Column(db.String(120))
    customer_phone = db.Column(db.String(40))
    customer_email = db.Column(db.String(120))
    party_size = db.Column(db.Integer)
    table_number = db.Column(db.String(20), default="")
    table_name = db.Column(db.String(120))
    check_in_time = db.Column(db.DateTime)
    check_out_time = db.Column(db.DateTime)
    restaurant_name = db.Column(db.String(120), default="")
    restaurant_address = db.Column(db.String(255))
    restaurant_phone = db.Column(db.String(40))

    payment_method = db.Column(db.String(20), default="CASH", nullable=False)
    subtotal_amount = db.Column(db.Float, default=0.0, nullable=False)
    discount_amount = db.Column(db.Float, default=0.0, nullable=False)
    extra_charges_amount = db.Column(db.Float, default=0.0, nullable=False)
    final_amount = db.Column(db.Float, default=0.0, nullable=False)
    received_amount = db.Column(db.Float)
    change_amount = db.Column(db.Float)
    notes = db.Column(db.Text)
    extra_charges = db.Column(db.JSON)
    created_at = db.Column(db.DateTime, default=utcnow)

    session = db.relationship("CustomerSession", backref="payments", lazy=True)
    items = db.relationship("PaymentItem", backref="payment", cascade="all, delete-orphan", lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "payment_number": self.payment_number,
            "session_id": self.session_id,
            "restaurant_id": self.restaurant_id,
            "customer_name": self.customer_name,
            "customer_phone": self.customer_phone,
            "customer_email": self.customer_email,
            "party_size": self.party_size,
            "table_number": self.table_number,
            "table_name": self.table_name,
            "check_in_time": _iso(self.check_in_time),
            "check_out_time": _iso(self.check_out_time),
            "restaurant_name": self.restaurant_name,
            "restaurant_address": self.restaurant_address,
            "restaurant_phone": self.restaurant_phone,
            "payment_method": self.payment_method,
            "subtotal_amount": self.subtotal_amount,
            "discount_amount": self.discount_amount,
            "extra_charges_amount": self.extra_charges_amount,
            "final_amount": self.final_amount,
            "received_amount": self.received_amount,
            "change_amount": self.change_amount,
            "notes": self.notes,
            "extra_charges": self.extra_charges,
            "created_at": _iso(self.created_at),
            "session": {"id": self.session.id, "status": self.session.status} if self.session else None,
            "items": [i.to_dict() for i in self.items],
        }


class PaymentItem(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    payment_id = db.Column(db.Integer, db.ForeignKey("payment.id"), nullable=False)
    menu_item_name = db.Column(db.String(120), nullable=False)
    menu_item_description = db.Column(db.Text)
    menu_item_price = db.Column(db.Float, nullable=False)
    category_name = db.Column(db.String(120))
    quantity = db.Column(db.Integer, nullable=False)
    unit_price = db.Column(db.Float, nullable=False)
    total_price = db.Column(db.Float, nullable=False)
    notes = db.Column(db.Text)
    selections = db.Column(db.JSON)

    def to_dict(self):
        return {
            "id": self.id,
            "payment_id": self.payment_id,
            "menu_item_name": self.menu_item_name,
            "menu_item_description": self.menu_item_description,
            "menu_item_price": self.menu_item_price,
            "category_name": self.category_name,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "total_price": self.total_price,
            "notes": self.notes,
            "selections": self.selections,
        }
