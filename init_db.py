"""
Script para inicializar o banco de dados do catálogo.
- Cria todas as tabelas (se não existirem)
"""
from loguru import logger

from config.database import engine, init_db


def main() -> None:
    logger.info("Inicializando banco de dados do catálogo em {}", engine.url.render_as_string(hide_password=True))
    init_db()
    logger.info("Tabelas criadas (se não existiam).")


if __name__ == "__main__":
    main()
