"""
Validações de upload de imagens do Mural (bucket mural-images).
"""
import logging
import os
import re

from django.conf import settings
from django.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = [
    'image/jpeg',
    'image/jpg',
    'image/png',
    'image/webp',
    'image/gif',
]

ALLOWED_IMAGE_EXTENSIONS = ['.jpg', '.jpeg', '.png', '.webp', '.gif']


def sanitize_filename(filename):
    """
    Remove componentes de caminho e caracteres perigosos do nome do arquivo.
    """
    if not filename:
        return 'imagem'

    filename = os.path.basename(filename)
    filename = re.sub(r'[<>:"/\\|?*\x00-\x1f]', '', filename)
    filename = re.sub(r'\s+', '_', filename)

    name, ext = os.path.splitext(filename)
    filename = name[:100] + ext
    if not name:
        filename = 'imagem' + ext
    return filename


def validate_mural_image(file):
    """
    Valida imagem anexada a uma postagem do Mural.

    Aceita jpeg, png, webp e gif até MURAL_MAX_IMAGE_SIZE (5 MB).

    Raises:
        ValidationError: se o arquivo não for válido
    """
    if not file:
        raise ValidationError('Nenhum arquivo fornecido.')

    max_size = settings.MURAL_MAX_IMAGE_SIZE
    if getattr(file, 'size', 0) > max_size:
        size_mb = max_size / (1024 * 1024)
        raise ValidationError(f'A imagem é muito grande. Tamanho máximo permitido: {size_mb:g}MB.')

    content_type = getattr(file, 'content_type', None)
    if content_type and content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationError(f'Tipo de arquivo não permitido: {content_type}.')

    filename = getattr(file, 'name', '')
    if filename:
        ext = os.path.splitext(filename.lower())[1]
        if ext not in ALLOWED_IMAGE_EXTENSIONS:
            raise ValidationError(
                f'Extensão de arquivo não permitida: {ext}. '
                f'Extensões permitidas: {", ".join(ALLOWED_IMAGE_EXTENSIONS)}'
            )
        sanitized = sanitize_filename(filename)
        if sanitized != filename:
            file.name = sanitized
            logger.info("Nome de arquivo sanitizado: %s -> %s", filename, sanitized)
