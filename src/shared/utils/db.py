from sqlalchemy import text

from shared.database import Base, get_engine


def _load_models():
    """Import every model module so its tables are registered on ``Base.metadata``."""
    import identity.session.session  # noqa: F401
    import identity.user.user  # noqa: F401
    import ordering.cart.cart  # noqa: F401
    import ordering.order.order  # noqa: F401
    import vendors.menu.menu_item  # noqa: F401
    import vendors.truck.truck  # noqa: F401


def setup_db():
    """Setup database schema"""
    _load_models()
    Base.metadata.create_all(get_engine())


def drop_db():
    """Drop database schema"""
    _load_models()
    Base.metadata.drop_all(get_engine())


def reset_db():
    """Delete every row while keeping the schema, children before parents."""
    with get_engine().begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


def ping_db() -> bool:
    with get_engine().connect() as conn:
        conn.execute(text("SELECT 1"))
    return True
