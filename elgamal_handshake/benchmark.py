"""
Handshake benchmark.

Builds one engine for the requested key size, then runs the full
keygen -> client -> server handshake the requested number of times,
checking on every trial that both sides ended up with the same secret.
Reports the engine setup time and the average handshake time.
"""

import argparse
import random
import statistics
import sys
import time
from dataclasses import dataclass, field
from typing import List, Optional

import sympy
from rich.box import ROUNDED
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .encryption import ElGamalExchange
from .errors import ElGamalError


@dataclass
class TrialResult:
    index: int
    secrets_match: bool
    q_is_prime: bool
    elapsed_ms: float


@dataclass
class BenchmarkReport:
    key_size: int
    setup_ms: float
    trials: List[TrialResult] = field(default_factory=list)

    @property
    def average_handshake_ms(self) -> float:
        if not self.trials:
            return 0.0
        return statistics.mean(t.elapsed_ms for t in self.trials)

    @property
    def all_matched(self) -> bool:
        return all(t.secrets_match for t in self.trials)


def run_benchmark(trials: int, key_size: int, seed: Optional[int] = None,
                  verbose: bool = False) -> BenchmarkReport:
    """Time engine setup and `trials` complete handshakes."""
    if trials < 0:
        raise ValueError("Trial count must be non-negative")

    rng = random.Random(seed) if seed is not None else None

    t0 = time.perf_counter()
    engine = ElGamalExchange(key_size=key_size, rng=rng, verbose=verbose)
    t1 = time.perf_counter()
    report = BenchmarkReport(key_size=key_size, setup_ms=(t1 - t0) * 1e3)

    for i in range(1, trials + 1):
        t0 = time.perf_counter()
        public_key, private_key = engine.generate_keys()
        client_secret, cipher = engine.client_side(public_key)
        server_secret = engine.server_side(private_key, cipher)
        t1 = time.perf_counter()

        report.trials.append(TrialResult(
            index=i,
            secrets_match=client_secret == server_secret,
            q_is_prime=bool(sympy.isprime(public_key.q)),
            elapsed_ms=(t1 - t0) * 1e3,
        ))
    return report


def render_report(console: Console, report: BenchmarkReport) -> None:
    t = Table(title=f"Handshakes with {report.key_size}-bit keys", box=ROUNDED)
    t.add_column("#", justify="right", style="bold cyan")
    t.add_column("secrets match", justify="center")
    t.add_column("q prime", justify="center", style="yellow")
    t.add_column("time, ms", justify="right", style="magenta")
    for r in report.trials:
        t.add_row(
            str(r.index),
            "[green]True[/green]" if r.secrets_match else "[bold red]False[/bold red]",
            "yes" if r.q_is_prime else "no",
            f"{r.elapsed_ms:.3f}",
        )
    console.print(t)

    console.print(Panel(
        f"calculating primes took {report.setup_ms:.3f}ms\n"
        f"average handshake time for {report.key_size} bit key is "
        f"{report.average_handshake_ms:.3f}ms",
        title="Summary",
        border_style="green" if report.all_matched else "red",
    ))


def _prompt_int(prompt: str) -> int:
    while True:
        raw = input(prompt)
        try:
            return int(raw)
        except ValueError:
            print(f"Not an integer: {raw!r}")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Benchmark the ElGamal-style Diffie-Hellman handshake."
    )
    p.add_argument(
        "--trials",
        type=int,
        default=None,
        help="number of handshakes to run (prompted for when omitted)",
    )
    p.add_argument(
        "--key-size",
        type=int,
        default=None,
        help="key size in bits (prompted for when omitted)",
    )
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="seed for a reproducible run (default: system randomness)",
    )
    p.add_argument(
        "--verbose",
        action="store_true",
        help="trace every engine step",
    )
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    trials = args.trials if args.trials is not None else _prompt_int("Trial times: ")
    key_size = args.key_size if args.key_size is not None else _prompt_int("Key size: ")

    console = Console()
    try:
        report = run_benchmark(trials, key_size, seed=args.seed, verbose=args.verbose)
    except (ElGamalError, ValueError) as e:
        console.print(f"[bold red]error:[/bold red] {e}")
        return 2

    render_report(console, report)
    return 0 if report.all_matched else 1


if __name__ == "__main__":
    sys.exit(main())
