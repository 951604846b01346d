"""Fixtures dos testes do catálogo: banco SQLite em memória já com o schema."""

import pytest
from sqlalchemy.pool import StaticPool

from config.database import create_engine_for, init_db, make_session_factory
from models.category import Category
from models.supplier import Supplier
from services.catalog_store import CatalogStore

# Menor PNG válido (1x1, transparente)
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)


@pytest.fixture(name="engine")
def engine_fixture():
    """Engine em memória; StaticPool mantém a mesma conexão entre sessões."""
    engine = create_engine_for("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="session_factory")
def session_factory_fixture(engine):
    return make_session_factory(engine)


@pytest.fixture(name="store")
def store_fixture(session_factory):
    return CatalogStore(session_factory)


@pytest.fixture(name="seeded")
def seeded_fixture(session_factory):
    """Categoria e fornecedor pré-cadastrados, como faria o cadastro administrativo."""
    db = session_factory()
    try:
        category = Category(name="Esportes")
        supplier = Supplier(tax_id="11.222.333/0001-81", name="Bolas Brasil Ltda", email="vendas@bolas.com.br")
        db.add_all([category, supplier])
        db.commit()
        return {"category_id": category.id, "supplier_id": supplier.id}
    finally:
        db.close()


@pytest.fixture(name="png_bytes")
def png_bytes_fixture():
    return PNG_BYTES
