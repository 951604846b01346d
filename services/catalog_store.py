"""
Persistência do catálogo: inserção e listagem de produtos, listagem de
categorias, fornecedores e unidades de medida.
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

from loguru import logger
from sqlalchemy import exc, select
from sqlalchemy.orm import Session, sessionmaker

from models.category import Category
from models.product import Product
from models.supplier import Supplier
from models.unit_of_measure import UnitOfMeasure
from services import photo_codec
from services.errors import CodecError, ConstraintViolation, StoreError, Unavailable
from services.photo_files import read_photo

# Erros do SQLAlchemy causados pelos dados (FK, CHECK, UNIQUE, tamanho de coluna)
_CONSTRAINT_ERRORS = (exc.IntegrityError, exc.DataError)

# Erros do SQLAlchemy que indicam banco fora do ar / conexão perdida
_UNAVAILABLE_ERRORS = (
    exc.OperationalError,
    exc.InterfaceError,
    exc.DisconnectionError,
    exc.TimeoutError,
)


@dataclass
class ProductDraft:
    """
    Produto ainda não gravado. Não tem id: quem atribui é o banco.
    """

    name: str
    price: Decimal
    category_id: int | None = None
    supplier_id: int | None = None
    description: str | None = None
    photo: str | None = None
    photo_media_type: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        price: Decimal,
        name: str | None = None,
        category_id: int | None = None,
        supplier_id: int | None = None,
        description: str | None = None,
        created_at: datetime | None = None,
    ) -> "ProductDraft":
        """
        Monta o rascunho a partir de um arquivo de imagem. Sem nome informado,
        usa o nome do arquivo sem extensão.
        """
        photo_file = read_photo(path)
        photo, media_type = photo_codec.encode_photo(photo_file.data, photo_file.content_type)
        return cls(
            name=name or photo_file.name,
            price=price,
            category_id=category_id,
            supplier_id=supplier_id,
            description=description,
            photo=photo,
            photo_media_type=media_type,
            created_at=created_at,
        )

    def decimal_price(self) -> Decimal:
        """Preço como Decimal finito e não negativo."""
        try:
            price = Decimal(str(self.price))
            if not price.is_finite() or price < 0:
                raise ConstraintViolation(f"Preço inválido: {self.price!r}")
        except InvalidOperation as e:
            raise ConstraintViolation(f"Preço inválido: {self.price!r}") from e
        return price

    def validate(self) -> None:
        if not self.name:
            raise ConstraintViolation("Nome do produto é obrigatório")
        if self.price is None:
            raise ConstraintViolation("Preço do produto é obrigatório")
        self.decimal_price()
        if (self.photo is None) != (self.photo_media_type is None):
            raise ConstraintViolation("Foto e formatoImagem devem ser informados juntos")
        if self.photo is not None:
            # A foto precisa estar de fato na codificação que o formatoImagem descreve
            try:
                photo_codec.decode_photo(self.photo, self.photo_media_type)
            except CodecError as e:
                raise ConstraintViolation(str(e)) from e


class CatalogStore:
    """
    Acesso ao catálogo. Recebe a session factory (ligada ao pool de conexões)
    em vez de usar uma conexão global, para os testes poderem usar outro banco.

    Cada operação abre uma sessão, executa um comando e devolve a conexão ao pool.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def _open(self) -> Session:
        return self._session_factory()

    def insert_product(self, draft: ProductDraft) -> Product:
        draft.validate()
        product = Product(
            name=draft.name,
            price=draft.decimal_price(),
            category_id=draft.category_id,
            supplier_id=draft.supplier_id,
            description=draft.description,
            photo=draft.photo,
            photo_media_type=draft.photo_media_type,
            created_at=draft.created_at or datetime.now(),
        )

        db = self._open()
        try:
            db.add(product)
            db.commit()
            db.refresh(product)
        except _CONSTRAINT_ERRORS as e:
            db.rollback()
            logger.warning("Produto {!r} rejeitado pelo banco: {}", draft.name, e.orig)
            raise ConstraintViolation(f"Produto {draft.name!r} viola restrição do banco: {e.orig}") from e
        except _UNAVAILABLE_ERRORS as e:
            db.rollback()
            logger.error("Banco indisponível ao inserir produto: {}", e)
            raise Unavailable("Banco de dados indisponível") from e
        except exc.SQLAlchemyError as e:
            db.rollback()
            logger.error("Falha ao inserir produto {!r}: {}", draft.name, e)
            raise StoreError(f"Falha ao inserir produto: {e}") from e
        finally:
            db.close()

        logger.info("Produto inserido: id={} nome={!r}", product.id, product.name)
        return product

    def _list(self, model) -> list:
        db = self._open()
        try:
            return list(db.execute(select(model).order_by(model.id)).unique().scalars().all())
        except _CONSTRAINT_ERRORS as e:
            logger.error("Dados inválidos em {}: {}", model.__tablename__, e.orig)
            raise ConstraintViolation(f"Dados inválidos em {model.__tablename__}: {e.orig}") from e
        except _UNAVAILABLE_ERRORS as e:
            logger.error("Banco indisponível ao listar {}: {}", model.__tablename__, e)
            raise Unavailable("Banco de dados indisponível") from e
        except exc.SQLAlchemyError as e:
            logger.error("Falha ao listar {}: {}", model.__tablename__, e)
            raise StoreError(f"Falha ao listar {model.__tablename__}: {e}") from e
        finally:
            db.close()

    def list_products(self) -> list[Product]:
        products = self._list(Product)
        logger.debug("{} produto(s) recuperado(s)", len(products))
        return products

    def list_categories(self) -> list[Category]:
        return self._list(Category)

    def list_suppliers(self) -> list[Supplier]:
        return self._list(Supplier)

    def list_units(self) -> list[UnitOfMeasure]:
        return self._list(UnitOfMeasure)
