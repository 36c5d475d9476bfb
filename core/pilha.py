from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, NamedTuple, Optional, Tuple, Union
import json
import logging

logger = logging.getLogger(__name__)

# Literal usado no arquivo de definição e nos traces para "vazio"
EPSILON_LITERAL = "{e}"


class Epsilon(Enum):
    """Símbolo vazio. Nunca pertence a nenhum dos alfabetos."""
    EPSILON = EPSILON_LITERAL

    def __str__(self) -> str:
        return self.value


EPSILON = Epsilon.EPSILON

Symbol = Union[str, Epsilon]


def symbol_text(sym: Symbol) -> str:
    return EPSILON_LITERAL if sym is EPSILON else sym


def symbol_from_text(text: str) -> Symbol:
    return EPSILON if text == EPSILON_LITERAL else text


class Transition(NamedTuple):
    """
    Transição (estado, entrada, desempilha) -> (estado, empilha).
    - push: símbolos a empilhar, o primeiro fica no topo. Tupla vazia para {e}.
    """
    src: int
    input_sym: Symbol
    pop_sym: Symbol
    dst: int
    push: Tuple[str, ...] = ()

    @property
    def key(self) -> Tuple[int, Symbol, Symbol]:
        return (self.src, self.input_sym, self.pop_sym)

    def __str__(self) -> str:
        push = "".join(self.push) if self.push else EPSILON_LITERAL
        return f"{self.src} {symbol_text(self.input_sym)} {symbol_text(self.pop_sym)} -> {self.dst} / {push}"


class AutomatoPilha:
    """
    Representa um Autômato de Pilha determinístico (Deterministic PDA).

    Os estados são inteiros 0..num_states-1; o estado num_states é o estado
    morto. O último símbolo do alfabeto da pilha é o fundo da pilha.
    Depois de construído o autômato não muda.
    """
    __slots__ = ("_num_states", "_accept_states", "_input_alphabet",
                 "_stack_alphabet", "_transitions")

    def __init__(self, num_states: int, accept_states: Iterable[int],
                 input_alphabet: Iterable[str], stack_alphabet: Iterable[str],
                 transitions: Iterable[Transition] = ()):
        if num_states < 1:
            raise ValueError(f"Número de estados inválido: {num_states}.")
        accept = frozenset(accept_states)
        for state in accept:
            if not 0 <= state < num_states:
                raise ValueError(f"Estado de aceitação '{state}' fora do intervalo 0..{num_states - 1}.")
        stack_alpha = tuple(stack_alphabet)
        if not stack_alpha:
            raise ValueError("O alfabeto da pilha precisa de ao menos o símbolo de fundo.")

        # Mapeia (estado, simbolo_entrada, topo_pilha) para a transição
        table: Dict[Tuple[int, Symbol, Symbol], Transition] = {}
        for t in transitions:
            for state in (t.src, t.dst):
                if not 0 <= state <= num_states:
                    raise ValueError(f"Estado '{state}' inválido na transição '{t}'.")
            if t.key in table:
                logger.warning("Transição duplicada para %s; mantendo '%s'.", t.key, t)
            table[t.key] = t

        self._num_states = num_states
        self._accept_states: FrozenSet[int] = accept
        self._input_alphabet: FrozenSet[str] = frozenset(input_alphabet)
        self._stack_alphabet: Tuple[str, ...] = stack_alpha
        self._transitions: Mapping[Tuple[int, Symbol, Symbol], Transition] = MappingProxyType(table)

    # -------------------------
    # Consultas
    # -------------------------
    @property
    def num_states(self) -> int:
        return self._num_states

    @property
    def dead_state(self) -> int:
        return self._num_states

    @property
    def accept_states(self) -> FrozenSet[int]:
        return self._accept_states

    @property
    def input_alphabet(self) -> FrozenSet[str]:
        return self._input_alphabet

    @property
    def stack_alphabet(self) -> Tuple[str, ...]:
        return self._stack_alphabet

    @property
    def bottom_symbol(self) -> str:
        return self._stack_alphabet[-1]

    @property
    def transitions(self) -> Mapping[Tuple[int, Symbol, Symbol], Transition]:
        return self._transitions

    def is_input_symbol(self, sym: str) -> bool:
        return sym in self._input_alphabet

    def is_accepting(self, state: int) -> bool:
        return state in self._accept_states

    def lookup(self, state: int, input_sym: Symbol, stack_top: Symbol) -> Optional[Transition]:
        """Retorna a transição para (estado, entrada, topo) ou None."""
        return self._transitions.get((state, input_sym, stack_top))

    def __repr__(self) -> str:
        return (f"AutomatoPilha(num_states={self._num_states}, "
                f"accept_states={sorted(self._accept_states)}, "
                f"transitions={len(self._transitions)})")

    # -------------------------
    # Serialização
    # -------------------------
    def to_json(self) -> str:
        """Serializa o autômato para uma string JSON."""
        data = {
            "num_states": self._num_states,
            "accept_states": sorted(self._accept_states),
            "input_alphabet": sorted(self._input_alphabet),
            "stack_alphabet": list(self._stack_alphabet),
            "transitions": [
                [t.src, symbol_text(t.input_sym), symbol_text(t.pop_sym), t.dst,
                 "".join(t.push) if t.push else EPSILON_LITERAL]
                for t in self._transitions.values()
            ],
        }
        return json.dumps(data, indent=2, ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: str) -> 'AutomatoPilha':
        """Cria um Autômato de Pilha a partir de uma string JSON."""
        data = json.loads(json_str)
        transitions = []
        for item in data.get("transitions", []):
            if len(item) != 5:
                raise ValueError(f"Transição malformada: {item!r}")
            src, inp, pop_sym, dst, push = item
            transitions.append(Transition(
                int(src), symbol_from_text(inp), symbol_from_text(pop_sym), int(dst),
                () if push == EPSILON_LITERAL else tuple(push),
            ))
        return cls(
            int(data["num_states"]),
            data.get("accept_states", []),
            data.get("input_alphabet", []),
            data.get("stack_alphabet", []),
            transitions,
        )
