"""
Erros do catálogo.

Toda falha do núcleo chega ao chamador como uma destas exceções; quem decide
mostrar mensagem, abortar ou tentar de novo é a camada de cima (app Streamlit).
"""


class CatalogError(Exception):
    """Base de todos os erros do catálogo."""


class CodecError(CatalogError, ValueError):
    """Texto de foto que não é base64 válido, ou formatoImagem mal formado."""


class StoreError(CatalogError):
    """Falha de persistência."""


class ConstraintViolation(StoreError):
    """Chave estrangeira inexistente, CNPJ duplicado, preço negativo etc."""


class Unavailable(StoreError):
    """Não foi possível obter conexão com o banco ou ela caiu no meio da operação."""


class PhotoIOError(CatalogError, OSError):
    """Falha de leitura/escrita de arquivo de foto."""
