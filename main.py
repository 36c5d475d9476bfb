"""
main.py - Simulador de Autômato de Pilha.

Uso:
    $ python main.py                     # lê PDA.txt e abre o prompt
    $ python main.py exemplos/anbn.txt   # outro arquivo de definição
    $ python main.py PDA.txt --gui       # visualizador gráfico
"""
import argparse
import ctypes
import sys
from typing import List, Optional

from config import load_settings
from console import Console
from core.leitor import PDAFormatError, load_pda
from core.pilha import AutomatoPilha
from logging_config import setup_logger

LOGGER_NAMES = ("core", "console", "gui", "config")


def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def run_gui(pda: Optional[AutomatoPilha], path: Optional[str], theme: str, max_steps: Optional[int]) -> int:
    import tkinter as tk
    import sv_ttk
    from gui.gui_pilha import PilhaGUI

    root = tk.Tk()

    try:
        # Melhora a resolução em telas com alta densidade de pixels (HiDPI) no Windows
        ctypes.windll.shcore.SetProcessDpiAwareness(1)
    except Exception:
        pass # Ignora o erro se não estiver no Windows ou a função não estiver disponível

    sv_ttk.set_theme(theme)
    PilhaGUI(root, pda=pda, path=path, max_steps=max_steps)
    root.mainloop()
    return 0


def build_parser(settings) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="simulador-pda", description="Simulador de Autômato de Pilha determinístico")
    ap.add_argument("definition", nargs="?", default=settings.pda_file,
                    help=f"arquivo de definição (.txt) ou snapshot (.json); padrão: {settings.pda_file}")
    ap.add_argument("--gui", action="store_true", help="abre o visualizador gráfico")
    ap.add_argument("--max-steps", type=int, default=settings.max_steps,
                    help="interrompe (rejeita) após N transições; padrão: sem limite")
    ap.add_argument("--log-level", default=settings.log_level,
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"], type=str.upper)
    ap.add_argument("--theme", default=settings.theme, choices=["light", "dark"], help="tema do sv_ttk (--gui)")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    args = build_parser(settings).parse_args(argv)

    for name in LOGGER_NAMES:
        setup_logger(name, log_file=settings.log_file, level=args.log_level)

    max_steps = args.max_steps if args.max_steps and args.max_steps > 0 else None

    try:
        pda = load_pda(args.definition)
    except (OSError, PDAFormatError) as e:
        if not args.gui:
            _eprint(f"Error loading {args.definition}: {e}")
            return 1
        # A interface gráfica pode abrir outro arquivo depois
        _eprint(f"Aviso: não foi possível carregar {args.definition}: {e}")
        return run_gui(None, None, args.theme, max_steps)

    if args.gui:
        return run_gui(pda, args.definition, args.theme, max_steps)

    Console(pda, source=args.definition, max_steps=max_steps).loop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
