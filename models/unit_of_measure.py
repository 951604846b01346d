from sqlalchemy import Column, Integer, String

from config.database import Base


class UnitOfMeasure(Base):
    __tablename__ = "unidademedida"

    id = Column(Integer, primary_key=True, autoincrement=True)
    description = Column("descricao", String(255), nullable=False)
    abbreviation = Column("sigla", String(10), nullable=True)
