from sqlalchemy import Column, Integer, String

from config.database import Base


class Supplier(Base):
    """
    Fornecedor identificado pelo CNPJ.
    """

    __tablename__ = "fornecedor"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tax_id = Column("cnpj", String(20), unique=True, nullable=False)
    name = Column("nome", String(255), nullable=False)
    email = Column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"Supplier(id={self.id!r}, tax_id={self.tax_id!r}, name={self.name!r})"
