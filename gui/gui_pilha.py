#!/usr/bin/env python3
"""
gui_pilha.py - Visualizador Tkinter para simular Autômatos de Pilha (PDA).
"""
import logging
import math
import os
import tkinter as tk
from tkinter import filedialog, messagebox, ttk
from collections import defaultdict
from typing import Callable, Dict, List, Optional, Tuple, Union

from PIL import ImageTk

from core.leitor import PDAFormatError, dump_pda, load_pda
from core.pilha import AutomatoPilha, EPSILON, symbol_text
from core.simulacao import Configuracao, Resultado, simulate, validate
from gui.icones import render_icon

logger = logging.getLogger(__name__)

STATE_RADIUS = 24
ANIM_MS = 500
ICON_SIZE = 32
TOOLTIP_DELAY_MS = 400


def drawn_states(pda: AutomatoPilha) -> List[int]:
    """Estados desenhados: 0..n-1 e o estado morto se alguma transição o usa."""
    states = list(range(pda.num_states))
    dead = pda.dead_state
    if any(dead in (t.src, t.dst) for t in pda.transitions.values()):
        states.append(dead)
    return states


def circle_layout(num_states: int, width: float, height: float) -> Dict[int, Tuple[float, float]]:
    """Distribui os estados 0..num_states-1 em um círculo, começando à esquerda."""
    cx, cy = width / 2, height / 2
    if num_states == 1:
        return {0: (cx, cy)}
    radius = max(min(width, height) / 2 - 3 * STATE_RADIUS, STATE_RADIUS * 2)
    positions = {}
    for i in range(num_states):
        angle = math.pi + 2 * math.pi * i / num_states
        positions[i] = (cx + radius * math.cos(angle), cy + radius * math.sin(angle))
    return positions


def edge_label(input_sym, pop_sym, push) -> str:
    """Rótulo 'entrada, desempilha / empilha' com ε para vazio."""
    text = f"{symbol_text(input_sym)}, {symbol_text(pop_sym)} / {''.join(push) or symbol_text(EPSILON)}"
    return text.replace(symbol_text(EPSILON), "ε")


class Dica:
    """
    Dica flutuante de um widget. `text` pode ser uma função, avaliada a cada
    exibição (ex.: resumo do autômato carregado no momento).
    """

    def __init__(self, widget: tk.Widget, text: Union[str, Callable[[], str]], delay_ms: int = TOOLTIP_DELAY_MS):
        self.widget = widget
        self.text = text
        self.delay_ms = delay_ms
        self._after_id = None
        self._window: Optional[tk.Toplevel] = None
        widget.bind("<Enter>", self._schedule, add="+")
        widget.bind("<Leave>", self._hide, add="+")
        widget.bind("<ButtonPress>", self._hide, add="+")

    def _schedule(self, _event=None):
        self._cancel()
        self._after_id = self.widget.after(self.delay_ms, self._show)

    def _cancel(self):
        if self._after_id is not None:
            self.widget.after_cancel(self._after_id)
            self._after_id = None

    def _show(self):
        self._after_id = None
        text = self.text() if callable(self.text) else self.text
        if not text or self._window is not None:
            return
        # Abaixo do widget, alinhada à esquerda
        x = self.widget.winfo_rootx()
        y = self.widget.winfo_rooty() + self.widget.winfo_height() + 4
        self._window = tk.Toplevel(self.widget)
        self._window.wm_overrideredirect(True)
        self._window.wm_geometry(f"+{x}+{y}")
        ttk.Label(self._window, text=text, padding=(6, 3), relief="solid", borderwidth=1).pack()

    def _hide(self, _event=None):
        self._cancel()
        if self._window is not None:
            self._window.destroy()
            self._window = None


class PilhaGUI:
    def __init__(self, root: tk.Misc, pda: Optional[AutomatoPilha] = None, path: Optional[str] = None,
                 max_steps: Optional[int] = None):
        self.root = root
        root.title("Simulador de Autômatos de Pilha")
        root.geometry("1100x750")

        style = ttk.Style()
        style.configure("TButton", padding=(8, 6))
        style.configure("Accent.TButton", padding=(8, 6))

        self.automato = pda
        self.current_filepath = path
        self.max_steps = max_steps
        self.icons = {}

        # Simulação
        self.result: Optional[Resultado] = None
        self.history: List[Configuracao] = []
        self.sim_step = 0
        self.sim_playing = False
        self.result_indicator = None

        # Zoom
        self.scale = 1.0

        self._build_toolbar()
        self._build_bottom_bar()
        self._build_statusbar()
        self._build_main_area()
        self._bind_events()
        self._update_title()
        self.draw_all()

    # -------------------------
    # Construção da janela
    # -------------------------
    def _build_toolbar(self):
        toolbar = tk.Frame(self.root)
        toolbar.pack(side=tk.TOP, fill=tk.X, padx=10, pady=(5, 10))

        self._create_toolbar_button(toolbar, "abrir", "Abrir...", self.cmd_open)
        self._create_toolbar_button(toolbar, "salvar", "Salvar Como...", self.cmd_save_as)

        self.info_label = ttk.Label(toolbar, text="", font=("Helvetica", 11, "bold"))
        self.info_label.pack(side=tk.RIGHT, padx=10)
        Dica(self.info_label, self._describe_automato)

        self.root.iconphoto(False, self._icon("pilha"))

    def _icon(self, icon_name) -> ImageTk.PhotoImage:
        # PhotoImage precisa de uma referência viva, senão o Tk descarta a imagem
        if icon_name not in self.icons:
            self.icons[icon_name] = ImageTk.PhotoImage(render_icon(icon_name, ICON_SIZE))
        return self.icons[icon_name]

    def _create_toolbar_button(self, parent, icon_name, tooltip_text, command):
        button = ttk.Button(parent, image=self._icon(icon_name), command=command)
        button.pack(side=tk.LEFT, padx=2)
        Dica(button, tooltip_text)

    def _describe_automato(self) -> str:
        if not self.automato:
            return ""
        states = drawn_states(self.automato)
        return (f"{len(self.automato.transitions)} transições\n"
                f"aceitação: {', '.join(map(str, sorted(self.automato.accept_states))) or '-'}\n"
                f"estado morto: {self.automato.dead_state}"
                f"{'' if self.automato.dead_state in states else ' (não usado)'}")

    def _build_main_area(self):
        main = tk.Frame(self.root)
        main.pack(fill=tk.BOTH, expand=True, padx=10, pady=0)

        self.canvas = tk.Canvas(main, bg="white")
        self.canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)

        side = tk.Frame(main)
        side.pack(side=tk.RIGHT, fill=tk.Y, padx=(10, 0))
        ttk.Label(side, text="Trace", font=("Helvetica", 10, "bold")).pack(anchor="w")
        self.trace_list = tk.Listbox(side, width=42, font=("Courier", 10), activestyle="none")
        self.trace_list.pack(fill=tk.Y, expand=True)

    def _build_bottom_bar(self):
        bottom = tk.Frame(self.root)
        bottom.pack(side=tk.BOTTOM, fill=tk.X, padx=10, pady=10)
        ttk.Label(bottom, text="Entrada:", font=("Helvetica", 10)).pack(side=tk.LEFT)
        self.input_entry = ttk.Entry(bottom, width=40)
        self.input_entry.pack(side=tk.LEFT, padx=5)
        ttk.Button(bottom, text="Simular", command=self.cmd_start_simulation, style="Accent.TButton").pack(side=tk.LEFT, padx=2)
        ttk.Button(bottom, text="Passo", command=self.cmd_step).pack(side=tk.LEFT, padx=2)
        ttk.Button(bottom, text="Play/Pausar", command=self.cmd_play_pause).pack(side=tk.LEFT, padx=2)
        ttk.Button(bottom, text="Reiniciar", command=self.cmd_reset_sim).pack(side=tk.LEFT, padx=2)

        # Canvas para desenhar a pilha e a fita de entrada
        self.sim_display_canvas = tk.Canvas(bottom, height=60, bg="white", highlightthickness=0)
        self.sim_display_canvas.pack(side=tk.LEFT, fill=tk.X, expand=True, padx=10)

    def _build_statusbar(self):
        self.status = tk.Label(self.root, text="Pronto", anchor="w", relief=tk.SUNKEN)
        self.status.pack(side=tk.BOTTOM, fill=tk.X)

    def _bind_events(self):
        self.canvas.bind("<Configure>", lambda e: self.draw_all())
        self.canvas.bind("<MouseWheel>", self.on_mousewheel)
        self.canvas.bind("<Button-4>", self.on_mousewheel)
        self.canvas.bind("<Button-5>", self.on_mousewheel)
        self.input_entry.bind("<Return>", lambda e: self.cmd_start_simulation())
        self.root.bind("<Control-o>", lambda e: self.cmd_open())

    def _update_title(self):
        if self.current_filepath:
            self.root.title(f"Simulador de Autômatos de Pilha — {self.current_filepath}")
        if self.automato:
            self.info_label.config(text=(
                f"{self.automato.num_states} estados | fundo: {self.automato.bottom_symbol} | "
                f"entrada: {' '.join(sorted(self.automato.input_alphabet))}"))
        else:
            self.info_label.config(text="Nenhum autômato carregado")

    # -------------------------
    # Arquivos
    # -------------------------
    def cmd_open(self):
        """Abre um arquivo de definição (.txt) ou snapshot (.json)."""
        path = filedialog.askopenfilename(
            filetypes=[("Definições de PDA", "*.txt *.json"), ("All files", "*.*")]
        )
        if not path:
            return
        try:
            self.automato = load_pda(path)
        except (OSError, PDAFormatError) as e:
            logger.warning("Falha ao abrir %s: %s", path, e)
            messagebox.showerror("Erro ao Abrir", f"Não foi possível carregar o arquivo:\n{e}", parent=self.root)
            return
        self.current_filepath = path
        self._update_title()
        self.cmd_reset_sim()
        self.status.config(text=f"Arquivo '{path}' carregado com sucesso.")

    def cmd_save_as(self):
        """Salva o autômato como definição (.txt) ou snapshot (.json)."""
        if not self.automato:
            self.status.config(text="Nenhum autômato para salvar.")
            return
        path = filedialog.asksaveasfilename(
            defaultextension=".txt",
            filetypes=[("Definição", "*.txt"), ("Snapshot JSON", "*.json")]
        )
        if not path:
            return
        if os.path.splitext(path)[1].lower() == ".json":
            content = self.automato.to_json()
        else:
            content = dump_pda(self.automato)
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            logger.warning("Falha ao salvar %s: %s", path, e)
            messagebox.showerror("Erro ao Salvar", f"Não foi possível salvar o arquivo:\n{e}", parent=self.root)
            return
        logger.info("Autômato salvo em %s", path)
        self.status.config(text=f"Arquivo salvo em '{path}'.")

    # -------------------------
    # Simulação
    # -------------------------
    def cmd_start_simulation(self):
        if not self.automato:
            messagebox.showwarning("Simulação", "Abra um arquivo de definição primeiro.", parent=self.root)
            return
        input_str = self.input_entry.get()
        if not validate(self.automato, input_str):
            messagebox.showwarning("Simulação", "INVALID INPUT", parent=self.root)
            self.status.config(text=f"'{input_str}' tem símbolos fora do alfabeto de entrada.")
            return

        self.result = simulate(self.automato, input_str, max_steps=self.max_steps)
        first = self.result.steps[0].before
        self.history = [first] + [step.after for step in self.result.steps if step.after is not None]
        self.sim_step = 0
        self.sim_playing = False
        self.result_indicator = None

        self.trace_list.delete(0, tk.END)
        for line in self.result.lines():
            self.trace_list.insert(tk.END, line)
        self._highlight_trace()
        self.draw_all()
        self.status.config(text=f"Simulação iniciada para '{input_str}'.")

    def cmd_step(self):
        if not self.history:
            self.status.config(text="Nenhuma simulação em andamento.")
            return

        if self.sim_step < len(self.history) - 1:
            self.sim_step += 1
        else:
            self.status.config(text=f"Fim da simulação ({self.result.halt.value}).")
            self.result_indicator = "ACEITA" if self.result.accepted else "REJEITADA"
        self._highlight_trace()
        self.draw_all()

    def cmd_play_pause(self):
        if not self.history: return
        self.sim_playing = not self.sim_playing
        if self.sim_playing:
            self.status.config(text="Reproduzindo...")
            self._playback_step()
        else:
            self.status.config(text="Pausado.")

    def _playback_step(self):
        if self.sim_playing and self.sim_step < len(self.history) - 1:
            self.cmd_step()
            self.root.after(ANIM_MS, self._playback_step)
        elif self.sim_playing:
            self.sim_playing = False
            self.cmd_step() # Mostra o resultado

    def cmd_reset_sim(self):
        self.result = None
        self.history = []
        self.sim_step = 0
        self.sim_playing = False
        self.result_indicator = None
        self.trace_list.delete(0, tk.END)
        self.draw_all()
        self.status.config(text="Simulação reiniciada.")

    def _highlight_trace(self):
        self.trace_list.selection_clear(0, tk.END)
        if self.result and self.result.steps:
            idx = min(self.sim_step, len(self.result.steps) - 1)
            self.trace_list.selection_set(idx)
            self.trace_list.see(idx)

    def _active_transition(self):
        """Transição que levou à configuração atual (None no início)."""
        if not self.result or self.sim_step == 0:
            return None
        return self.result.steps[self.sim_step - 1].transition

    # -------------------------
    # Desenho
    # -------------------------
    def on_mousewheel(self, event):
        delta = event.delta if hasattr(event, "delta") and event.delta else (120 if event.num == 4 else -120)
        factor = 1.0 + (delta / 1200.0)
        self.scale = max(0.4, min(2.5, self.scale * factor))
        self.draw_all()

    def draw_all(self):
        self.canvas.delete("all")
        self._draw_simulation_display()
        self._draw_edges_and_states()

    def _draw_simulation_display(self):
        """Desenha a pilha e a fita de entrada restante no canvas inferior."""
        canvas = self.sim_display_canvas
        canvas.delete("all")

        if not self.history:
            return

        config = self.history[self.sim_step]

        # 1. Desenha a Pilha (topo à esquerda)
        canvas.create_text(10, 25, text="Pilha:", anchor="w", font=("Helvetica", 10, "bold"))
        x_pos = 60
        cell_width, cell_height = 30, 30
        base_y = 50

        canvas.create_line(x_pos - 5, base_y, x_pos + max(len(config.stack), 1) * cell_width, base_y, width=2)

        for symbol in config.stack:
            canvas.create_rectangle(x_pos, base_y - cell_height, x_pos + cell_width, base_y, fill="#e0f2fe", outline="#7dd3fc")
            canvas.create_text(x_pos + cell_width/2, base_y - cell_height/2, text=symbol, font=("Courier", 12, "bold"))
            x_pos += cell_width

        # 2. Desenha a Entrada Restante
        tape_start_x = x_pos + 50
        canvas.create_text(tape_start_x, 25, text="Entrada Restante:", anchor="w", font=("Helvetica", 10, "bold"))

        input_to_show = config.remaining or "ε"
        x_pos = tape_start_x + 130

        # Cabeça de leitura
        canvas.create_polygon(x_pos + cell_width/2, base_y - cell_height - 5, x_pos + cell_width/2 - 5, base_y - cell_height - 15, x_pos + cell_width/2 + 5, base_y - cell_height - 15, fill="black")

        for symbol in input_to_show:
            canvas.create_rectangle(x_pos, base_y - cell_height, x_pos + cell_width, base_y, fill="#f1f5f9", outline="#cbd5e1")
            canvas.create_text(x_pos + cell_width/2, base_y - cell_height/2, text=symbol, font=("Courier", 12, "bold"))
            x_pos += cell_width

    def _draw_edges_and_states(self):
        """Desenha os estados e as transições no canvas principal."""
        if not self.automato:
            return

        width = max(self.canvas.winfo_width(), 200)
        height = max(self.canvas.winfo_height(), 200)
        states = drawn_states(self.automato)
        dead = self.automato.dead_state
        positions = circle_layout(len(states), width, height)
        r = STATE_RADIUS * self.scale

        active_state = self.history[self.sim_step].state if self.history else None
        active_transition = self._active_transition()

        agg = defaultdict(list)
        for t in self.automato.transitions.values():
            agg[(t.src, t.dst)].append((edge_label(t.input_sym, t.pop_sym, t.push), t == active_transition))

        for (src, dst), labels in agg.items():
            x1, y1 = positions[src]
            x2, y2 = positions[dst]

            is_active_transition = any(active for _, active in labels)
            color = "#16a34a" if is_active_transition else "black"
            line_width = 3 if is_active_transition else 1.5
            text = "\n".join(label for label, _ in labels)

            if src == dst:
                self.canvas.create_line(x1 - r*0.5, y1 - r*0.8, x1 - r*1.2, y1 - r*1.6, x1 + r*1.2, y1 - r*1.6, x1 + r*0.5, y1 - r*0.8, smooth=True, arrow=tk.LAST, width=line_width, fill=color)
                self.canvas.create_text(x1, y1 - r*1.8, text=text, fill=color, justify=tk.CENTER, anchor="s")
            else:
                dx, dy = x2 - x1, y2 - y1
                dist = math.hypot(dx, dy)
                ux, uy = dx/dist, dy/dist

                bend = 0.25 if (dst, src) in agg else 0
                start_x, start_y = x1 + ux * r, y1 + uy * r
                end_x, end_y = x2 - ux * r, y2 - uy * r
                mid_x, mid_y = (start_x + end_x) / 2, (start_y + end_y) / 2
                ctrl_x, ctrl_y = mid_x - uy*dist*bend, mid_y + ux*dist*bend
                text_offset = 15
                txt_x, txt_y = mid_x - uy*(dist*bend + text_offset), mid_y + ux*(dist*bend + text_offset)

                self.canvas.create_line(start_x, start_y, ctrl_x, ctrl_y, end_x, end_y, smooth=True, arrow=tk.LAST, width=line_width, fill=color)
                self.canvas.create_text(txt_x, txt_y, text=text, fill=color, justify=tk.CENTER)

        # Desenha estados
        for idx, sid in enumerate(states):
            x, y = positions[idx]
            is_final = self.automato.is_accepting(sid)
            is_active = (sid == active_state)

            fill, outline, border = ("#e0f2fe", "#0284c7", 3) if is_active else ("white", "black", 2)
            if sid == dead:
                fill = "#fee2e2" if not is_active else fill

            self.canvas.create_oval(x-r, y-r, x+r, y+r, fill=fill, outline=outline, width=border)
            if is_final:
                self.canvas.create_oval(x-r*0.83, y-r*0.83, x+r*0.83, y+r*0.83, outline="black", width=1)
            self.canvas.create_text(x, y, text="∅" if sid == dead else str(sid))
            if sid == 0:
                self.canvas.create_line(x-2*r, y, x-r, y, arrow=tk.LAST)

        # Desenha o indicador de resultado final
        if self.result_indicator:
            color = "#16a34a" if self.result_indicator == "ACEITA" else "#dc2626"
            self.canvas.create_text(width - 10, 20, text=self.result_indicator,
                                    font=("Helvetica", 16, "bold"), fill=color, anchor="ne")
