import sys
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from pathlib import Path

# Garante que o diretório raiz do projeto esteja no path (para rodar de qualquer cwd)
_ROOT = Path(__file__).resolve().parents[0]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from config.database import PHOTO_EXPORT_DIR, SessionLocal, init_db
from services import photo_codec
from services.catalog_store import CatalogStore, ProductDraft
from services.errors import CatalogError
from services.photo_files import export_photos, guess_content_type
from utils.formatters import format_currency, format_date


st.set_page_config(
    page_title="Catálogo de produtos",
    page_icon="📦",
    layout="wide",
)


@st.cache_resource
def initialize_app() -> CatalogStore:
    """
    Cria as tabelas (se não existirem) e devolve o store ligado ao pool padrão.
    """
    init_db()
    return CatalogStore(SessionLocal)


@st.cache_resource
def get_executor() -> ThreadPoolExecutor:
    return ThreadPoolExecutor(max_workers=2, thread_name_prefix="catalogo")


def run_in_worker(fn, *args):
    """Executa a chamada ao banco fora da thread do script e espera o resultado."""
    return get_executor().submit(fn, *args).result()


def product_rows(products) -> list:
    return [
        {
            "ID": p.id,
            "Nome": p.name,
            "Preço": format_currency(p.price),
            "Categoria": p.category.name if p.category else "",
            "Fornecedor": p.supplier.name if p.supplier else "",
            "Descrição": p.description or "",
            "Foto": p.photo_media_type or "",
            "Criado em": format_date(p.created_at) if p.created_at else "",
        }
        for p in products
    ]


def insert_section(store: CatalogStore) -> None:
    st.subheader("Novo produto")
    categorias = run_in_worker(store.list_categories)
    fornecedores = run_in_worker(store.list_suppliers)

    foto = st.file_uploader("Foto do produto (opcional)", type=["png", "jpg", "jpeg", "gif", "webp"])
    nome_padrao = Path(foto.name).stem if foto else "Bola de futebol americano"

    nome = st.text_input("Nome", value=nome_padrao)
    preco = st.number_input("Preço", min_value=0.0, value=99.0, step=1.0)
    descricao = st.text_input("Descrição", value="Bola de futebol americano")

    cat_opcoes = {"(Sem categoria)": None}
    cat_opcoes.update({c.name: c.id for c in categorias})
    categoria = st.selectbox("Categoria", options=list(cat_opcoes))

    forn_opcoes = {"(Sem fornecedor)": None}
    forn_opcoes.update({f"{f.name} ({f.tax_id})": f.id for f in fornecedores})
    fornecedor = st.selectbox("Fornecedor", options=list(forn_opcoes))

    if st.button("Inserir", type="primary"):
        draft = ProductDraft(
            name=nome.strip(),
            price=Decimal(str(preco)),
            category_id=cat_opcoes[categoria],
            supplier_id=forn_opcoes[fornecedor],
            description=descricao.strip() or None,
        )
        if foto is not None:
            content_type = foto.type or guess_content_type(Path(foto.name))
            draft.photo, draft.photo_media_type = photo_codec.encode_photo(foto.getvalue(), content_type)
        try:
            produto = run_in_worker(store.insert_product, draft)
        except CatalogError as e:
            logger.error("Falha ao inserir produto: {}", e)
            st.toast(f"Não foi possível inserir o produto: {e}", icon="❌")
        else:
            st.toast(f"Produto {produto.name!r} inserido (id {produto.id})", icon="✅")


def list_section(store: CatalogStore) -> None:
    st.subheader("Produtos cadastrados")
    col_rec, col_exp = st.columns(2)
    with col_rec:
        recuperar = st.button("Recuperar", use_container_width=True)
    with col_exp:
        exportar = st.button("Exportar fotos", use_container_width=True)

    if recuperar:
        try:
            produtos = run_in_worker(store.list_products)
        except CatalogError as e:
            st.toast(f"Não foi possível recuperar os produtos: {e}", icon="❌")
        else:
            st.toast(f"{len(produtos)} produto(s) recuperado(s)", icon="ℹ️")
            if produtos:
                st.dataframe(product_rows(produtos), use_container_width=True, hide_index=True)
            else:
                st.info("Nenhum produto cadastrado.")

    if exportar:
        try:
            produtos = run_in_worker(store.list_products)
            arquivos = export_photos(produtos, PHOTO_EXPORT_DIR)
        except (CatalogError, ValueError) as e:
            logger.error("Falha ao exportar fotos: {}", e)
            st.toast(f"Falha ao exportar fotos: {e}", icon="❌")
        else:
            st.toast(f"{len(arquivos)} foto(s) exportada(s) para {PHOTO_EXPORT_DIR}", icon="✅")


def main() -> None:
    st.markdown("# 📦 Catálogo de produtos")
    st.caption("Insira produtos, recupere a lista e exporte as fotos gravadas no banco.")
    st.markdown("---")

    try:
        store = initialize_app()
    except SQLAlchemyError as e:
        logger.error("Não foi possível preparar o banco: {}", e)
        st.error(f"Banco de dados indisponível: {e}")
        st.stop()

    try:
        insert_section(store)
    except CatalogError as e:
        st.error(f"Não foi possível carregar categorias e fornecedores: {e}")
    st.markdown("---")
    list_section(store)


main()
