from sqlalchemy import CheckConstraint, Column, Integer, String

from config.database import Base


class Category(Base):
    """
    Categoria de produto. Cadastrada fora do catálogo (somente leitura aqui).
    """

    __tablename__ = "categoria"
    __table_args__ = (CheckConstraint("nome <> ''", name="ck_categoria_nome"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column("nome", String(255), nullable=False)

    def __repr__(self) -> str:
        return f"Category(id={self.id!r}, name={self.name!r})"
