from werkzeug.security import generate_password_hash

from srms.app import create_app
from srms.models import db, Category, MenuItem, Restaurant, Table, User, ROLE_ADMIN, ROLE_STAFF

app = create_app()
with app.app_context():
    db.create_all()
    restaurant = Restaurant.query.filter_by(name="Demo Bistro").first()
    if restaurant is None:
        restaurant = Restaurant(name="Demo Bistro", address="1 Main St", phone="555-0100", is_active=True)
        db.session.add(restaurant)
        db.session.flush()

    if not User.query.filter_by(email="admin@example.com").first():
        db.session.add(User(name="Admin", email="admin@example.com", role=ROLE_ADMIN,
                            password_hash=generate_password_hash("password"), restaurant_id=restaurant.id))
    if not User.query.filter_by(email="staff@example.com").first():
        db.session.add(User(name="Staff", email="staff@example.com", role=ROLE_STAFF,
                            password_hash=generate_password_hash("password"), restaurant_id=restaurant.id))

    if Category.query.filter_by(restaurant_id=restaurant.id).count() == 0:
        categories = {
            name: Category(name=name, sort_order=i, restaurant_id=restaurant.id)
            for i, name in enumerate(("Pizza", "Salad", "Pasta"), start=1)
        }
        db.session.add_all(categories.values())
        db.session.flush()
        items = [
            MenuItem(name="Margherita Pizza", price=11.99, category_id=categories["Pizza"].id),
            MenuItem(name="Caesar Salad", price=9.50, category_id=categories["Salad"].id),
            MenuItem(name="Spaghetti Bolognese", price=12.25, category_id=categories["Pasta"].id),
        ]
        for item in items:
            item.restaurant_id = restaurant.id
        db.session.add_all(items)

    if Table.query.filter_by(restaurant_id=restaurant.id).count() == 0:
        db.session.add_all([
            Table(number="T1", capacity=4, sort_order=1, grid_x=0, restaurant_id=restaurant.id),
            Table(number="T2", capacity=2, sort_order=2, grid_x=3, restaurant_id=restaurant.id),
            Table(number="T3", capacity=6, sort_order=3, grid_x=6, restaurant_id=restaurant.id),
        ])

    db.session.commit()
    print("Seeded. Email=admin@example.com (or staff@example.com), Password=password")
