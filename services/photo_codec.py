"""
Codificação das fotos de produto para a coluna texto do banco.

Convenção única: base64 padrão (alfabeto +/) com padding "=", tanto para
codificar quanto para decodificar.
"""
import base64
import binascii
from typing import Tuple

from services.errors import CodecError

MEDIA_TYPE_SUFFIX = ";base64"


def encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def decode(text: str) -> bytes:
    """
    Inverso de encode. Texto fora do alfabeto ou com padding errado gera
    CodecError; nunca devolve bytes vazios no lugar de dados corrompidos.
    """
    try:
        return base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise CodecError(f"Foto com base64 inválido: {exc}") from exc


def compose_media_type(content_type: str) -> str:
    """
    Monta o formatoImagem, ex.: "image/png" -> "image/png;base64".
    """
    if not content_type:
        raise CodecError("Content-type da foto não informado")
    return f"{content_type}{MEDIA_TYPE_SUFFIX}"


def parse_media_type(media_type: str) -> str:
    """
    Extrai o content-type do formatoImagem, ex.: "image/png;base64" -> "image/png".
    Qualquer content-type é aceito e devolvido como veio.
    """
    if not media_type or not media_type.endswith(MEDIA_TYPE_SUFFIX):
        raise CodecError(f"formatoImagem sem sufixo {MEDIA_TYPE_SUFFIX!r}: {media_type!r}")
    content_type = media_type[: -len(MEDIA_TYPE_SUFFIX)]
    if not content_type:
        raise CodecError(f"formatoImagem sem content-type: {media_type!r}")
    return content_type


def extension_for(media_type: str) -> str:
    """
    Extensão usada ao exportar a foto: o subtipo do content-type
    ("image/png;base64" -> "png").
    """
    content_type = parse_media_type(media_type)
    return content_type.split("/", 1)[-1]


def encode_photo(data: bytes, content_type: str) -> Tuple[str, str]:
    """Devolve (foto, formatoImagem) prontos para gravar no produto."""
    return encode(data), compose_media_type(content_type)


def decode_photo(photo: str, media_type: str) -> bytes:
    # Valida o formatoImagem antes, para não aceitar foto sem descrição da codificação
    parse_media_type(media_type)
    return decode(photo)
