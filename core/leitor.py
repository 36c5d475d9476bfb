"""
leitor.py - Leitura do arquivo de definição de um Autômato de Pilha.

Formato:
    linha 1: número de estados
    linha 2: estados de aceitação
    linha 3: alfabeto de entrada
    linha 4: alfabeto da pilha (o último é o fundo da pilha)
    demais : uma transição por linha, "S I P -> S2 / EMPILHA"
"""
import logging
import os
import re
from typing import List, Optional

from core.pilha import AutomatoPilha, Transition, Symbol, EPSILON, EPSILON_LITERAL

logger = logging.getLogger(__name__)

HEADER_LINES = 4

# Forma compacta do lado esquerdo, ex.: "0(Z" ou "1{e}Z"
_COMPACT_LHS = re.compile(r"(\d+)(\{e\}|\S)(\{e\}|\S)")


class PDAFormatError(ValueError):
    """Erro no arquivo de definição. Guarda a linha (1-based) quando conhecida."""

    def __init__(self, message: str, lineno: Optional[int] = None):
        self.lineno = lineno
        if lineno is not None:
            message = f"linha {lineno}: {message}"
        super().__init__(message)


def _parse_symbol(token: str) -> Symbol:
    if token == EPSILON_LITERAL:
        return EPSILON
    if len(token) != 1:
        raise ValueError(f"Símbolo inválido '{token}' (use um caractere ou {EPSILON_LITERAL}).")
    return token


def _parse_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ValueError(f"{what} não é um inteiro: '{token}'.") from None


def parse_transition(line: str) -> Transition:
    """Converte uma linha 'S I P -> S2 / EMPILHA' em uma Transition."""
    if "->" not in line:
        raise ValueError(f"Transição sem '->': '{line}'.")
    lhs, rhs = line.split("->", 1)

    tokens = lhs.split()
    if len(tokens) != 3:
        match = _COMPACT_LHS.fullmatch("".join(tokens))
        if not match:
            raise ValueError(f"Lado esquerdo inválido: '{lhs.strip()}'.")
        tokens = list(match.groups())
    state_tok, input_tok, pop_tok = tokens

    if "/" not in rhs:
        raise ValueError(f"Transição sem '/': '{line}'.")
    dst_tok, push_tok = rhs.split("/", 1)
    push_tok = push_tok.strip()
    if not push_tok:
        raise ValueError(f"Nada a empilhar em '{line}' (use {EPSILON_LITERAL}).")

    return Transition(
        _parse_int(state_tok, "Estado"),
        _parse_symbol(input_tok),
        _parse_symbol(pop_tok),
        _parse_int(dst_tok.strip(), "Estado de destino"),
        () if push_tok == EPSILON_LITERAL else tuple(push_tok),
    )


def parse_pda(text: str) -> AutomatoPilha:
    """Cria o autômato a partir do texto de definição."""
    lines = text.splitlines()
    if len(lines) < HEADER_LINES:
        raise PDAFormatError(f"Definição incompleta: esperadas {HEADER_LINES} linhas de cabeçalho, encontradas {len(lines)}.")

    try:
        num_states = _parse_int(lines[0].strip(), "Número de estados")
    except ValueError as e:
        raise PDAFormatError(str(e), 1) from None
    try:
        accept_states = [_parse_int(tok, "Estado de aceitação") for tok in lines[1].split()]
    except ValueError as e:
        raise PDAFormatError(str(e), 2) from None

    input_alphabet = lines[2].split()
    stack_alphabet = lines[3].split()
    if not stack_alphabet:
        raise PDAFormatError("Alfabeto da pilha vazio.", 4)

    transitions: List[Transition] = []
    for lineno, line in enumerate(lines[HEADER_LINES:], start=HEADER_LINES + 1):
        line = line.strip()
        if not line:
            continue
        try:
            transitions.append(parse_transition(line))
        except ValueError as e:
            raise PDAFormatError(str(e), lineno) from None

    try:
        pda = AutomatoPilha(num_states, accept_states, input_alphabet, stack_alphabet, transitions)
    except ValueError as e:
        raise PDAFormatError(str(e)) from None
    return pda


def load_pda(path: str) -> AutomatoPilha:
    """Lê um arquivo de definição (.txt) ou um snapshot JSON (.json)."""
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()

    if os.path.splitext(path)[1].lower() == ".json":
        try:
            pda = AutomatoPilha.from_json(text)
        except (ValueError, KeyError, TypeError) as e:
            raise PDAFormatError(f"JSON inválido: {e}") from None
    else:
        pda = parse_pda(text)

    logger.info("Autômato carregado de '%s': %d estados, %d transições.",
                path, pda.num_states, len(pda.transitions))
    return pda


def dump_pda(pda: AutomatoPilha) -> str:
    """Escreve o autômato no formato de definição (inverso de parse_pda)."""
    lines = [
        str(pda.num_states),
        " ".join(str(s) for s in sorted(pda.accept_states)),
        " ".join(sorted(pda.input_alphabet)),
        " ".join(pda.stack_alphabet),
    ]
    lines.extend(str(t) for t in pda.transitions.values())
    return "\n".join(lines) + "\n"
