"""
simulacao.py - Execução determinística de um Autômato de Pilha.

A simulação percorre uma única configuração por vez: a cada passo procura a
transição para (estado, próximo símbolo, topo da pilha) e, se não houver e
ainda restar entrada, tenta a transição-ε de (estado, ε, topo da pilha).
"""
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple
import logging

from core.pilha import AutomatoPilha, Transition, Symbol, EPSILON, EPSILON_LITERAL

logger = logging.getLogger(__name__)


class Parada(Enum):
    """Motivo pelo qual a simulação terminou."""
    ACCEPT = "accept"   # entrada consumida em um estado de aceitação
    DEAD = "dead"       # chegou ao estado morto
    STUCK = "stuck"     # nenhuma transição aplicável
    LIMIT = "limit"     # limite de passos atingido


class Configuracao(NamedTuple):
    """Configuração instantânea: estado, entrada restante e pilha (topo primeiro)."""
    state: int
    remaining: str
    stack: Tuple[str, ...]

    @property
    def top(self) -> Symbol:
        return self.stack[0] if self.stack else EPSILON

    @property
    def next_input(self) -> Symbol:
        return self.remaining[0] if self.remaining else EPSILON

    def input_text(self) -> str:
        return self.remaining or EPSILON_LITERAL

    def top_text(self) -> str:
        return self.stack[0] if self.stack else EPSILON_LITERAL

    def stack_text(self) -> str:
        return "".join(self.stack) or EPSILON_LITERAL


class Passo(NamedTuple):
    """
    Um registro do trace. Quando a máquina trava, transition e after são None.
    """
    before: Configuracao
    transition: Optional[Transition] = None
    after: Optional[Configuracao] = None

    @property
    def stuck(self) -> bool:
        return self.transition is None


def format_step(step: Passo) -> str:
    """Formata o passo como 'q, entrada/topo -> q2, entrada2/pilha2'."""
    b = step.before
    head = f"{b.state}, {b.input_text()}/{b.top_text()}"
    if step.after is None:
        return head
    a = step.after
    return f"{head} -> {a.state}, {a.input_text()}/{a.stack_text()}"


class Resultado(NamedTuple):
    accepted: bool
    steps: List[Passo]
    halt: Parada
    final: Configuracao

    def lines(self) -> List[str]:
        """Linhas do trace; execuções aceitas terminam com 'q, {e}/topo'."""
        out = [format_step(step) for step in self.steps]
        if self.accepted:
            out.append(f"{self.final.state}, {EPSILON_LITERAL}/{self.final.top_text()}")
        return out


# -------------------------
# Operações
# -------------------------
def validate(pda: AutomatoPilha, input_str: str) -> bool:
    """True se todos os caracteres pertencem ao alfabeto de entrada."""
    return all(pda.is_input_symbol(c) for c in input_str)


def simulate(pda: AutomatoPilha, input_str: str, max_steps: Optional[int] = None) -> Resultado:
    """
    Simula a execução do autômato sobre input_str.

    Supõe que validate(pda, input_str) já foi verificado. max_steps limita o
    número de transições aplicadas (None = sem limite); ciclos de
    transições-ε não são detectados de outra forma.
    """
    # Lista com o topo no final; as configurações guardam o topo primeiro
    stack: List[str] = [pda.bottom_symbol]
    state = 0
    remaining = input_str
    steps: List[Passo] = []

    def snapshot() -> Configuracao:
        return Configuracao(state, remaining, tuple(reversed(stack)))

    while True:
        before = snapshot()

        if max_steps is not None and len(steps) >= max_steps:
            logger.warning("Limite de %d passos atingido em %s; rejeitando.", max_steps, format_step(Passo(before)))
            return Resultado(False, steps, Parada.LIMIT, before)

        stack_top = before.top
        input_sym = before.next_input
        transition = pda.lookup(state, input_sym, stack_top)
        consumes = transition is not None and input_sym is not EPSILON
        if transition is None and remaining:
            transition = pda.lookup(state, EPSILON, stack_top)

        if transition is None:
            steps.append(Passo(before))
            logger.debug("travou: %s", format_step(steps[-1]))
            # Travou: o veredito depende só do estado atual, reste entrada ou não
            accepted = pda.is_accepting(state)
            return Resultado(accepted, steps, Parada.STUCK, before)

        if stack:
            stack.pop()
        if consumes:
            remaining = remaining[1:]
        # O primeiro símbolo declarado termina no topo
        stack.extend(reversed(transition.push))
        state = transition.dst

        after = snapshot()
        steps.append(Passo(before, transition, after))
        logger.debug("%s", format_step(steps[-1]))

        if not remaining and pda.is_accepting(state):
            return Resultado(True, steps, Parada.ACCEPT, after)

        if state == pda.dead_state:
            return Resultado(False, steps, Parada.DEAD, after)


def run(pda: AutomatoPilha, input_str: str) -> Tuple[bool, List[Passo]]:
    """Simulação simples: retorna (aceita, trace)."""
    result = simulate(pda, input_str)
    return result.accepted, result.steps
