"""
icones.py - Ícones da barra de ferramentas desenhados com o Pillow.

Os desenhos são feitos em alta resolução e reduzidos com LANCZOS, para que a
borda fique suave em qualquer tamanho.
"""
from typing import Callable, Dict

from PIL import Image, ImageDraw

OVERSAMPLE = 4
INK = (30, 41, 59, 255)
ACCENT = (56, 189, 248, 255)
PAPER = (241, 245, 249, 255)


def _abrir(draw: ImageDraw.ImageDraw, s: float):
    # Pasta: aba em cima, corpo embaixo
    draw.rectangle((0.10 * s, 0.22 * s, 0.45 * s, 0.34 * s), fill=ACCENT)
    draw.rectangle((0.10 * s, 0.30 * s, 0.90 * s, 0.82 * s), fill=ACCENT, outline=INK, width=int(0.05 * s))


def _salvar(draw: ImageDraw.ImageDraw, s: float):
    # Disquete
    draw.rectangle((0.14 * s, 0.14 * s, 0.86 * s, 0.86 * s), fill=INK)
    draw.rectangle((0.28 * s, 0.14 * s, 0.72 * s, 0.40 * s), fill=PAPER)
    draw.rectangle((0.26 * s, 0.56 * s, 0.74 * s, 0.86 * s), fill=ACCENT)


def _pilha(draw: ImageDraw.ImageDraw, s: float):
    # Três células empilhadas, a de cima destacada
    for i, color in enumerate((ACCENT, PAPER, PAPER)):
        top = (0.12 + 0.26 * i) * s
        draw.rectangle((0.22 * s, top, 0.78 * s, top + 0.22 * s), fill=color, outline=INK, width=int(0.04 * s))


GLYPHS: Dict[str, Callable[[ImageDraw.ImageDraw, float], None]] = {
    "abrir": _abrir,
    "salvar": _salvar,
    "pilha": _pilha,
}


def render_icon(name: str, size: int = 32) -> Image.Image:
    """Retorna o ícone `name` como imagem RGBA quadrada de lado `size`."""
    try:
        glyph = GLYPHS[name]
    except KeyError:
        raise ValueError(f"Ícone desconhecido: {name!r}") from None

    big = size * OVERSAMPLE
    img = Image.new("RGBA", (big, big), (0, 0, 0, 0))
    glyph(ImageDraw.Draw(img), big)
    return img.resize((size, size), Image.Resampling.LANCZOS)
