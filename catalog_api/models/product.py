from sqlalchemy import Column, Integer, String, Float, Text

from catalog_api.database import Base


class Product(Base):
    """
    Product model representing an entry of the catalog.

    Attributes:
        id: Unique identifier assigned on insert, never reused
        name: Product name (trimmed, never empty)
        price: Product price
        description: Free-form description, empty string when not given
        quantity: Quantity on hand
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
    description = Column(Text, nullable=False, default="")
    quantity = Column(Integer, nullable=False)

    # AUTOINCREMENT keeps SQLite from handing out the id of a deleted last row
    __table_args__ = (
        {"sqlite_autoincrement": True},
    )

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', quantity={self.quantity})>"


products_table = Product.__table__
