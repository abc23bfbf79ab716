"""
cli.py - interactive did-you-mean shell
Features:
- Load a dictionary file (one identifier per line) and query it with typos
- Suggestion tables with probabilities, rendered with Rich
- Standalone distance checks, config editing and timing stats
"""

import argparse
import random
import shlex
import sys
import time
from typing import List, Optional

# ui styling with Rich
from rich.console import Console
from rich.table import Table
from rich.prompt import Prompt
from rich import box

from typo_lookup.core.corrector import TypoCorrector
from typo_lookup.utils.config_manager import Config
from typo_lookup.utils.logger_utils import Log
from typo_lookup.utils.metrics_tracker import Metrics

BANNER = "Typo Lookup (type /help for cmds)"
HELP = [
    ("<text>", "suggest alternatives for <text>"),
    ("/load <file>", "replace the dictionary with the identifiers in <file>"),
    ("/dist <meant> <typed>", "exact typo distance between two strings"),
    ("/config [key val]", "show or change settings"),
    ("/stats", "index and timing stats"),
    ("/bench [n]", "time n random typo queries"),
    ("/quit", "exit"),
]

log = Log()


def read_words(path: str) -> List[str]:
    with open(path, "r", encoding="utf8") as f:
        return [ln.strip() for ln in f if ln.strip() and not ln.startswith("#")]


def perturb(word: str, rng: random.Random) -> str:
    """One random swap/delete/replace/insert, for benchmarking."""
    if len(word) < 2:
        return word + "x"
    chars = list(word)
    i = rng.randrange(len(chars) - 1)
    kind = rng.choice(("swap", "delete", "replace", "insert"))
    if kind == "swap":
        chars[i], chars[i + 1] = chars[i + 1], chars[i]
    elif kind == "delete":
        del chars[i]
    elif kind == "replace":
        chars[i] = rng.choice("abcdefghijklmnopqrstuvwxyz")
    else:
        chars.insert(i, rng.choice("abcdefghijklmnopqrstuvwxyz"))
    return "".join(chars)


class CLI:
    """Command-line interface around a TypoCorrector."""

    def __init__(self, config: Optional[Config] = None, console: Optional[Console] = None,
                 metrics: Optional[Metrics] = None):
        self.cfg = config if config is not None else Config()
        self.console = console if console is not None else Console()
        self.metrics = metrics if metrics is not None else Metrics()
        self.tc = TypoCorrector(self.cfg)
        self.words: List[str] = []
        self.running = True

    def start(self):
        self.console.rule(f"[bold magenta]{BANNER}[/bold magenta]")
        while self.running:
            try:
                line = Prompt.ask("[green]typed[/green]", default="", console=self.console).strip()
            except (EOFError, KeyboardInterrupt):
                self.console.print("\nbye.")
                break
            if line:
                self.handle(line)

    # COMMAND HANDLING -----------------------------------------------------------
    def handle(self, line: str):
        if not line.startswith("/"):
            self.suggest(line)
            return
        try:
            p = shlex.split(line)
        except ValueError as e:
            log.warning(f"[CLI] could not parse {line!r}: {e}")
            self.console.print(f"[red]bad input:[/red] {e} (try /help)")
            return
        c = p[0].lower()

        if c in ("/q", "/quit", "/exit"):
            self.running = False
            self.console.print("bye.")
        elif c == "/help":
            self._show_help()
        elif c == "/load" and len(p) > 1:
            self.load_file(p[1])
        elif c == "/dist" and len(p) == 3:
            d = self.tc.distance(p[1], p[2])
            self.console.print(f"distance({p[1]!r}, {p[2]!r}) = {d:.3f}")
        elif c == "/config":
            self._config(p[1:])
        elif c == "/stats":
            self._show_stats()
        elif c == "/bench":
            n = int(p[1]) if len(p) > 1 and p[1].isdigit() else 100
            self.bench(n)
        else:
            self.console.print("[red]unknown cmd[/red] (try /help)")

    def suggest(self, typed: str):
        t0 = time.perf_counter()
        try:
            result = self.tc.lookup(typed)
        except ValueError as e:
            self.console.print(f"[red]bad query settings:[/red] {e}")
            return
        dt = time.perf_counter() - t0
        self.metrics.record("suggest_time", dt)

        if typed in self.tc:
            self.console.print(f"[cyan]{typed!r} is in the dictionary[/cyan]")
        if not result:
            self.console.print(f"no suggestions ({dt*1000:.1f} ms)")
            return
        table = Table(title=f"did you mean ({dt*1000:.1f} ms)", box=box.SIMPLE)
        table.add_column("suggestion", style="bold")
        table.add_column("probability", justify="right")
        table.add_column("distance", justify="right")
        for p, spelling in result.ranked(int(self.tc.settings["max_suggestions"])):
            table.add_row(spelling, f"{p:.3f}", f"{self.tc.distance(spelling, typed):.2f}")
        self.console.print(table)

    def load_file(self, path: str):
        try:
            words = read_words(path)
        except (OSError, UnicodeDecodeError) as e:
            log.error(f"[CLI] load {path} failed: {e}")
            self.console.print(f"[red]err:[/red] {e}")
            return
        t0 = time.perf_counter()
        n = self.tc.load(words)
        dt = time.perf_counter() - t0
        self.metrics.record("build_time", dt)
        self.words = list(self.tc.index.snapshot.words)
        self.console.print(f"loaded {n} words ({self.tc.index.snapshot.node_count} nodes) in {dt:.3f}s")

    def bench(self, n: int = 100, seed: int = 0):
        if not self.words:
            self.console.print("load a dictionary first")
            return
        rng = random.Random(seed)
        queries = [perturb(rng.choice(self.words), rng) for _ in range(n)]
        t0 = time.perf_counter()
        for q in queries:
            self.tc.suggest(q)
        dt = time.perf_counter() - t0
        self.metrics.record("bench_time", dt / n)
        self.console.print(f"bench: {dt/n*1000:.3f} ms avg per suggest over {n} queries")

    def _config(self, args: List[str]):
        if not args:
            table = Table(title="config", box=box.SIMPLE)
            table.add_column("key")
            table.add_column("value")
            for k, v in self.cfg.items():
                table.add_row(k, str(v))
            self.console.print(table)
        elif len(args) == 2:
            old = self.cfg.data.get(args[0])
            try:
                ok = self.cfg.set(args[0], args[1])
            except ValueError:
                self.console.print("bad val")
                return
            if not ok:
                self.console.print("No such option")
                return
            # rebuild models from the new settings, keep the loaded dictionary
            try:
                tc = TypoCorrector(self.cfg)
            except ValueError as e:
                log.error(f"[CLI] config {args[0]}={args[1]} rejected: {e}")
                self.cfg.set(args[0], old)
                self.console.print(f"[red]err:[/red] {e}")
                return
            tc.index = self.tc.index
            self.tc = tc
            self.console.print(f"{args[0]} = {self.cfg.get(args[0])}")
        else:
            self.console.print("usage: /config [key val]")

    def _show_stats(self):
        table = Table(title="stats", box=box.SIMPLE)
        table.add_column("metric")
        table.add_column("value", justify="right")
        for k, v in self.tc.stats().items():
            table.add_row(k, str(v))
        for k, (count, avg) in self.metrics.summary().items():
            table.add_row(f"{k} (avg of {count})", f"{avg*1000:.3f} ms")
        self.console.print(table)

    def _show_help(self):
        table = Table(box=box.SIMPLE, show_header=False)
        for cmd, desc in HELP:
            table.add_row(cmd, desc)
        self.console.print(table)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="typo-lookup", description="typo-tolerant identifier lookup")
    ap.add_argument("--dict", dest="dictionary", help="dictionary file, one identifier per line")
    ap.add_argument("--config", default="typo_lookup.json", help="JSON config path")
    ap.add_argument("--max-distance", type=float, help="override the search budget")
    ap.add_argument("query", nargs="*", help="run these queries and exit")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = Config(args.config)
    if args.max_distance is not None:
        cfg.data["max_distance"] = args.max_distance
    cli = CLI(cfg)
    if args.dictionary:
        cli.load_file(args.dictionary)
    if args.query:
        for q in args.query:
            cli.handle(q)
        return 0
    cli.start()
    return 0


if __name__ == "__main__":
    sys.exit(main())
