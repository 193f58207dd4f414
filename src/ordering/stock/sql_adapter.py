"""SQLAlchemy stock store.

Works against any SQL database SQLAlchemy supports (SQLite in development
and tests, PostgreSQL in production). The ``medicines`` table belongs to
the catalog; it is declared here so the engine and the database CLI can
address it.
"""

from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    create_engine,
    insert,
    select,
    update,
)
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from ordering.stock.port import MedicineRecord, StockStore

metadata = MetaData()

medicines = Table(
    "medicines",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("name", String(255), nullable=False, default=""),
    Column("price", Numeric(10, 2), nullable=False),
    Column("stock", Integer, nullable=False, default=0),
    Column("seller_id", String(64), nullable=False, index=True),
    Column("is_active", Boolean, nullable=False, default=True),
    CheckConstraint("stock >= 0", name="ck_medicines_stock_non_negative"),
    CheckConstraint("price >= 0", name="ck_medicines_price_non_negative"),
)


def build_engine(database_uri: str) -> Engine:
    """Create an engine for the catalog database.

    A bare ``sqlite://`` URI is an in-memory database; it is pinned to a
    single shared connection so every caller sees the same data.
    """
    if database_uri in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            database_uri,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if database_uri.startswith("sqlite"):
        return create_engine(database_uri, connect_args={"check_same_thread": False, "timeout": 30})
    return create_engine(database_uri, pool_pre_ping=True)


class SqlStockStore(StockStore):
    def __init__(self, engine: Engine):
        self._engine = engine

    @classmethod
    def from_uri(cls, database_uri: str) -> "SqlStockStore":
        return cls(build_engine(database_uri))

    @property
    def engine(self) -> Engine:
        return self._engine

    # -------------------------------------------------------------------
    # Schema
    # -------------------------------------------------------------------
    def create_schema(self) -> None:
        metadata.create_all(self._engine)

    def drop_schema(self) -> None:
        metadata.drop_all(self._engine)

    # -------------------------------------------------------------------
    # Catalog seeding (catalog CRUD itself lives outside this engine)
    # -------------------------------------------------------------------
    def add_medicine(self, medicine_id, price, stock, seller_id, name="", is_active=True) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                insert(medicines).values(
                    id=str(medicine_id),
                    name=name,
                    price=Decimal(str(price)),
                    stock=stock,
                    seller_id=str(seller_id),
                    is_active=is_active,
                )
            )

    def update_medicine(self, medicine_id, **values) -> None:
        with self._engine.begin() as conn:
            conn.execute(update(medicines).where(medicines.c.id == str(medicine_id)).values(**values))

    # -------------------------------------------------------------------
    # StockStore
    # -------------------------------------------------------------------
    def resolve_medicines(self, medicine_ids: list[str]) -> list[MedicineRecord]:
        if not medicine_ids:
            return []

        stmt = select(medicines).where(
            medicines.c.id.in_(sorted(set(medicine_ids))),
            medicines.c.is_active.is_(True),
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()

        return [
            MedicineRecord(
                medicine_id=row["id"],
                price=Decimal(row["price"]),
                stock=row["stock"],
                seller_id=row["seller_id"],
                is_active=row["is_active"],
            )
            for row in rows
        ]

    def compare_and_decrement(self, medicine_id: str, quantity: int) -> bool:
        stmt = (
            update(medicines)
            .where(
                medicines.c.id == medicine_id,
                medicines.c.is_active.is_(True),
                medicines.c.stock >= quantity,
            )
            .values(stock=medicines.c.stock - quantity)
        )
        with self._engine.begin() as conn:
            result = conn.execute(stmt)
        return result.rowcount == 1

    def increment(self, medicine_id: str, quantity: int) -> bool:
        stmt = update(medicines).where(medicines.c.id == medicine_id).values(stock=medicines.c.stock + quantity)
        with self._engine.begin() as conn:
            result = conn.execute(stmt)
        return result.rowcount == 1

    def stock_of(self, medicine_id: str) -> int | None:
        stmt = select(medicines.c.stock).where(medicines.c.id == medicine_id)
        with self._engine.connect() as conn:
            return conn.execute(stmt).scalar_one_or_none()
