"""Testes de inserção e listagem do catálogo."""

from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import create_engine, exc

from config.database import make_session_factory
from models.unit_of_measure import UnitOfMeasure
from services import photo_codec
from services.catalog_store import CatalogStore, ProductDraft
from services.errors import ConstraintViolation, StoreError, Unavailable


def _fields(product):
    return (
        product.id,
        product.name,
        product.price,
        product.category_id,
        product.supplier_id,
        product.description,
        product.photo,
        product.photo_media_type,
        product.created_at,
    )


def test_insert_assigns_new_id(store, seeded, png_bytes):
    photo, media_type = photo_codec.encode_photo(png_bytes, "image/png")
    draft = ProductDraft(
        name="Bola de futebol americano",
        price=Decimal("99.00"),
        category_id=seeded["category_id"],
        supplier_id=seeded["supplier_id"],
        description="Bola de futebol americano",
        photo=photo,
        photo_media_type=media_type,
    )

    product = store.insert_product(draft)

    assert product.id is not None and product.id > 0
    assert product.price == Decimal("99.00")
    assert product.photo == photo
    assert isinstance(product.created_at, datetime)

    products = store.list_products()
    assert len(products) == 1
    assert _fields(products[0]) == _fields(product)


def test_ids_are_not_reused(store):
    first = store.insert_product(ProductDraft(name="Bola", price=Decimal("10")))
    second = store.insert_product(ProductDraft(name="Rede", price=Decimal("20")))

    assert second.id > first.id
    assert [p.id for p in store.list_products()] == [first.id, second.id]


def test_created_at_from_draft_is_kept(store):
    quando = datetime(2023, 4, 5, 6, 7, 8)

    product = store.insert_product(ProductDraft(name="Bola", price=Decimal("1"), created_at=quando))

    assert product.created_at == quando
    assert store.list_products()[0].created_at == quando


def test_created_at_defaults_to_now(store):
    antes = datetime.now()
    product = store.insert_product(ProductDraft(name="Bola", price=Decimal("1")))

    assert antes <= product.created_at <= datetime.now()


def test_free_product_is_allowed(store):
    assert store.insert_product(ProductDraft(name="Brinde", price=Decimal("0"))).price == Decimal("0")


def test_unknown_category_is_rejected(store):
    with pytest.raises(ConstraintViolation):
        store.insert_product(ProductDraft(name="Bola", price=Decimal("99"), category_id=999999))

    assert store.list_products() == []


def test_unknown_supplier_is_rejected(store, seeded):
    with pytest.raises(ConstraintViolation):
        store.insert_product(
            ProductDraft(
                name="Bola",
                price=Decimal("99"),
                category_id=seeded["category_id"],
                supplier_id=999999,
            )
        )

    assert store.list_products() == []


@pytest.mark.parametrize(
    "draft",
    [
        ProductDraft(name="Bola", price=Decimal("-0.01")),
        ProductDraft(name="", price=Decimal("1")),
        ProductDraft(name="Bola", price=Decimal("1"), photo="YQ=="),
        ProductDraft(name="Bola", price=Decimal("1"), photo_media_type="image/png;base64"),
        ProductDraft(name="Bola", price=Decimal("1"), photo="YQ==", photo_media_type="image/png"),
        ProductDraft(name="Bola", price=float("nan")),
        ProductDraft(name="Bola", price="abc"),
        ProductDraft(name="Bola", price=Decimal("Infinity")),
        ProductDraft(name="Bola", price=None),
        ProductDraft(name="Bola", price=Decimal("1"), photo="not-valid-base64!!", photo_media_type="image/png;base64"),
    ],
)
def test_invalid_draft_is_rejected(store, draft):
    with pytest.raises(ConstraintViolation):
        store.insert_product(draft)

    assert store.list_products() == []


def test_constraint_violation_is_a_store_error(store):
    with pytest.raises(StoreError):
        store.insert_product(ProductDraft(name="Bola", price=Decimal("1"), category_id=999999))


def test_list_categories_and_suppliers(store, seeded):
    categories = store.list_categories()
    suppliers = store.list_suppliers()

    assert [(c.id, c.name) for c in categories] == [(seeded["category_id"], "Esportes")]
    assert [(s.id, s.tax_id, s.name) for s in suppliers] == [
        (seeded["supplier_id"], "11.222.333/0001-81", "Bolas Brasil Ltda")
    ]


def test_list_units(store, session_factory):
    db = session_factory()
    try:
        db.add(UnitOfMeasure(description="Unidade", abbreviation="UN"))
        db.add(UnitOfMeasure(description="Peça"))
        db.commit()
    finally:
        db.close()

    units = store.list_units()

    assert [(u.description, u.abbreviation) for u in units] == [("Unidade", "UN"), ("Peça", None)]


def test_empty_catalog(store):
    assert store.list_products() == []
    assert store.list_categories() == []
    assert store.list_suppliers() == []


def test_related_rows_are_loaded(store, seeded):
    store.insert_product(
        ProductDraft(name="Bola", price=Decimal("5"), category_id=seeded["category_id"])
    )

    listed = store.list_products()[0]
    assert listed.category.name == "Esportes"
    assert listed.supplier is None


@pytest.fixture(name="offline_store")
def offline_store_fixture(tmp_path):
    # Diretório inexistente: o SQLite não consegue abrir o arquivo
    engine = create_engine(f"sqlite:///{tmp_path / 'nao-existe' / 'catalogo.db'}")
    yield CatalogStore(make_session_factory(engine))
    engine.dispose()


def test_insert_when_database_is_unavailable(offline_store):
    with pytest.raises(Unavailable):
        offline_store.insert_product(ProductDraft(name="Bola", price=Decimal("1")))


def test_list_when_database_is_unavailable(offline_store):
    with pytest.raises(Unavailable):
        offline_store.list_products()
    with pytest.raises(Unavailable):
        offline_store.list_categories()


class _RejectingSession:
    """Sessão que falha no commit/execute como um banco que recusa o valor da coluna."""

    def __init__(self):
        self.rolled_back = False

    def _fail(self, *args, **kwargs):
        raise exc.DataError("INSERT INTO produto ...", {}, Exception("value too long for type character varying(255)"))

    commit = _fail
    execute = _fail

    def add(self, obj):
        pass

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


def test_data_error_is_a_constraint_violation():
    session = _RejectingSession()
    store = CatalogStore(lambda: session)

    with pytest.raises(ConstraintViolation):
        store.insert_product(ProductDraft(name="B" * 300, price=Decimal("1")))
    assert session.rolled_back

    with pytest.raises(ConstraintViolation):
        store.list_products()


def test_valid_photo_is_accepted(store, png_bytes):
    photo, media_type = photo_codec.encode_photo(png_bytes, "image/png")

    product = store.insert_product(
        ProductDraft(name="Bola", price=Decimal("1"), photo=photo, photo_media_type=media_type)
    )

    assert photo_codec.decode_photo(product.photo, product.photo_media_type) == png_bytes
