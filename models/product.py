from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from config.database import Base


class Product(Base):
    """
    Produto do catálogo.

    A foto fica em uma coluna texto (base64 com padding) e formatoImagem
    descreve o conteúdo no formato "<content-type>;base64".
    """

    __tablename__ = "produto"
    __table_args__ = (CheckConstraint("preco >= 0", name="ck_produto_preco"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column("nome", String(255), nullable=False)
    price = Column("preco", Numeric(10, 2), nullable=False)
    # Referências opcionais, sem cascade: excluir categoria/fornecedor não remove produtos
    category_id = Column("categoria", Integer, ForeignKey("categoria.id"), nullable=True)
    supplier_id = Column("fornecedor", Integer, ForeignKey("fornecedor.id"), nullable=True)
    description = Column("descricao", String(255), nullable=True)
    photo = Column("foto", Text, nullable=True)
    photo_media_type = Column("formatoImagem", String(100), nullable=True)
    created_at = Column("dataCriacao", DateTime, nullable=True, default=datetime.now)

    category = relationship("Category", lazy="joined")
    supplier = relationship("Supplier", lazy="joined")

    def __repr__(self) -> str:
        return f"Product(id={self.id!r}, name={self.name!r}, price={self.price!r})"
