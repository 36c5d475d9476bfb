"""
console.py - Laço interativo: lê uma cadeia por linha e informa se o
autômato a aceita. "quit" (qualquer caixa) encerra.
"""
import logging
import sys
from typing import Optional, TextIO

from core.pilha import AutomatoPilha
from core.simulacao import simulate, validate

logger = logging.getLogger(__name__)

QUIT_COMMAND = "quit"


class Console:
    def __init__(self, pda: AutomatoPilha, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
                 source: str = "PDA.txt", max_steps: Optional[int] = None):
        self.pda = pda
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.source = source
        self.max_steps = max_steps

    def _print(self, text: str = "") -> None:
        print(text, file=self.stdout)

    def evaluate(self, input_str: str) -> Optional[bool]:
        """Avalia uma cadeia. Retorna None se ela tiver símbolos fora do alfabeto."""
        if not validate(self.pda, input_str):
            self._print("INVALID INPUT")
            return None

        self._print(">>>Computation…")
        result = simulate(self.pda, input_str, max_steps=self.max_steps)
        for line in result.lines():
            self._print(line)
        self._print("ACCEPTED" if result.accepted else "REJECTED")
        logger.info("'%s' -> %s (%s, %d passos)", input_str,
                    "ACCEPTED" if result.accepted else "REJECTED", result.halt.value, len(result.steps))
        return result.accepted

    def loop(self) -> None:
        self._print(f">>>Loading {self.source}…")
        while True:
            self._print(">>>Please enter a string to evaluate: ")
            line = self.stdin.readline()
            if not line:
                # Fim da entrada padrão: encerra como "quit"
                self._print(">>>Goodbye!")
                break
            input_str = line.rstrip("\r\n")
            if input_str.lower() == QUIT_COMMAND:
                self._print(">>>Goodbye!")
                break
            self.evaluate(input_str)
