"""
Leitura de imagens do disco e exportação das fotos gravadas no catálogo.
"""
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from loguru import logger

from models.product import Product
from services import photo_codec
from services.errors import PhotoIOError

_PATH_SEPARATORS = {"/", "\\"}


@dataclass(frozen=True)
class PhotoFile:
    name: str
    content_type: str
    data: bytes


def guess_content_type(path: Path) -> str:
    content_type, _ = mimetypes.guess_type(path.name)
    if content_type:
        return content_type
    # Extensão desconhecida: segue a convenção image/<extensão>
    return f"image/{path.suffix.lstrip('.').lower() or 'octet-stream'}"


def read_photo(path: str | Path) -> PhotoFile:
    """
    Lê o arquivo inteiro. O nome sem extensão vira o nome padrão do produto.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise PhotoIOError(e.errno, f"Não foi possível ler a foto {path}: {e.strerror}", str(path)) from e
    return PhotoFile(name=path.stem, content_type=guess_content_type(path), data=data)


def _export_file_name(product: Product, extension: str) -> str:
    # O arquivo tem de ficar direto em output_dir: nada de separadores nem "." / ".."
    if not product.name or product.name in (".", "..") or any(sep in product.name for sep in _PATH_SEPARATORS):
        raise ValueError(f"Nome de produto inválido para arquivo: {product.name!r}")
    if any(sep in extension for sep in _PATH_SEPARATORS):
        raise ValueError(f"Extensão de foto inválida para arquivo: {extension!r}")
    return f"{product.name}.{extension}"


def export_photo(product: Product, output_dir: str | Path) -> Path:
    """
    Grava a foto do produto em <output_dir>/<nome>.<extensão>, criando a pasta
    se preciso. A foto é decodificada antes de qualquer escrita no disco.
    """
    if product.photo is None or not product.photo_media_type:
        raise ValueError(f"Produto {product.name!r} não tem foto")

    data = photo_codec.decode_photo(product.photo, product.photo_media_type)
    extension = photo_codec.extension_for(product.photo_media_type)

    output_dir = Path(output_dir)
    target = output_dir / _export_file_name(product, extension)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
    except OSError as e:
        raise PhotoIOError(e.errno, f"Não foi possível gravar a foto {target}: {e.strerror}", str(target)) from e

    logger.info("Foto do produto {!r} exportada para {}", product.name, target)
    return target


def export_photos(products: Iterable[Product], output_dir: str | Path) -> list[Path]:
    """
    Exporta as fotos de todos os produtos que têm foto; os demais são ignorados.
    """
    exported = []
    for product in products:
        if product.photo is None:
            logger.debug("Produto {!r} sem foto, nada a exportar", product.name)
            continue
        exported.append(export_photo(product, output_dir))
    return exported
