import pytest

pytest.importorskip("PIL")

from gui.icones import GLYPHS, render_icon  # noqa: E402


@pytest.mark.parametrize("name", sorted(GLYPHS))
def test_render_icon_is_square_rgba(name):
    img = render_icon(name, 32)
    assert img.mode == "RGBA"
    assert img.size == (32, 32)
    # Algo foi desenhado, e o fundo continua transparente
    alpha = img.getchannel("A")
    assert alpha.getextrema()[1] == 255
    assert alpha.getpixel((0, 0)) == 0


def test_render_icon_other_size():
    assert render_icon("pilha", 80).size == (80, 80)


def test_render_icon_unknown_name():
    with pytest.raises(ValueError, match="desconhecido"):
        render_icon("fechar")
