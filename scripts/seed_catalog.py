"""
Seed de categorias, fornecedores e unidades de medida para testar o catálogo.
O catálogo só lê essas tabelas; este script faz o papel do cadastro administrativo.
"""
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from config.database import SessionLocal, init_db
from models.category import Category
from models.supplier import Supplier
from models.unit_of_measure import UnitOfMeasure

CATEGORIAS = ["Esportes", "Brinquedos", "Vestuário"]

FORNECEDORES = [
    dict(tax_id="11.222.333/0001-81", name="Bolas Brasil Ltda", email="vendas@bolasbrasil.com.br"),
    dict(tax_id="44.555.666/0001-99", name="Distribuidora Central", email=None),
]

UNIDADES = [
    dict(description="Unidade", abbreviation="UN"),
    dict(description="Caixa", abbreviation="CX"),
    dict(description="Quilograma", abbreviation="KG"),
]


def seed(db: Session) -> None:
    """Insere o que ainda não existe. Pode rodar mais de uma vez."""
    existentes = set(db.execute(select(Category.name)).scalars())
    for nome in CATEGORIAS:
        if nome not in existentes:
            db.add(Category(name=nome))

    cnpjs = set(db.execute(select(Supplier.tax_id)).scalars())
    for dados in FORNECEDORES:
        if dados["tax_id"] not in cnpjs:
            db.add(Supplier(**dados))

    siglas = set(db.execute(select(UnitOfMeasure.abbreviation)).scalars())
    for dados in UNIDADES:
        if dados["abbreviation"] not in siglas:
            db.add(UnitOfMeasure(**dados))

    db.commit()


def main() -> None:
    init_db()
    db = SessionLocal()
    try:
        seed(db)
        logger.info(
            "Seed concluído: {} categoria(s), {} fornecedor(es), {} unidade(s)",
            len(CATEGORIAS),
            len(FORNECEDORES),
            len(UNIDADES),
        )
    finally:
        db.close()


if __name__ == "__main__":
    main()
