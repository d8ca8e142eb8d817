"""Live entropy monitor — interactive TUI dashboard.

Shows the harvest as it happens:
- Pool fill bar and byte counters
- Signal quality sparkline against the admission threshold
- Hex dump of the most recently whitened bytes
"""

from __future__ import annotations

import signal
import time
from collections import deque

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from audiorando.engine import AudioEntropyEngine
from audiorando.harvest import Harvester
from audiorando.sources.base import FrameSource

# ── Sparkline characters ──
SPARK = "▁▂▃▄▅▆▇█"


def _sparkline(values: list[float], width: int = 30) -> str:
    """Render a sparkline string from values."""
    if not values:
        return ""
    recent = values[-width:]
    mn, mx = min(recent), max(recent)
    rng = mx - mn if mx > mn else 1.0
    return "".join(SPARK[min(int((v - mn) / rng * 7), 7)] for v in recent)


def _level_bar(level: int, capacity: int, width: int = 30) -> Text:
    """Colored fill bar for the pool."""
    ratio = min(level / capacity, 1.0) if capacity else 0.0
    filled = int(ratio * width)
    if ratio > 0.5:
        color = "green"
    elif ratio > 0.1:
        color = "yellow"
    else:
        color = "red"
    return Text("█" * filled + "░" * (width - filled), style=color)


def _hex_dump(data: bytes, width: int = 16) -> Text:
    """Colorized hex dump of whitened bytes."""
    text = Text()
    for i, b in enumerate(data[:width * 4]):
        if b < 64:
            style = "blue"
        elif b < 128:
            style = "green"
        elif b < 192:
            style = "yellow"
        else:
            style = "red"
        text.append(f"{b:02x}", style=style)
        text.append(" ")
        if (i + 1) % width == 0 and i < width * 4 - 1:
            text.append("\n")
    return text


class EntropyMonitor:
    """Live TUI for one engine fed by one frame source."""

    def __init__(
        self,
        engine: AudioEntropyEngine,
        source: FrameSource,
        refresh_rate: float = 0.5,
        interval: float = 0.05,
    ) -> None:
        self.engine = engine
        self.source = source
        self.refresh_rate = refresh_rate
        self.console = Console()
        self.harvester = Harvester(engine, source, interval=interval)

        self._quality_history: deque = deque(maxlen=60)
        self._last_whitened: bytes = b""
        self._seen_ticks = 0
        self._start_time = 0.0

    def _observe(self) -> None:
        """Pick up the harvester's latest tick."""
        tick = self.harvester.last_tick
        if tick is None or self.harvester.ticks == self._seen_ticks:
            return
        self._seen_ticks = self.harvester.ticks
        self._quality_history.append(tick.quality)
        if tick.whitened_bytes:
            self._last_whitened = tick.whitened_bytes

    def _build_pool_panel(self) -> Panel:
        s = self.engine.status()
        text = Text()
        text.append("  Pool: ", style="bold")
        text.append(_level_bar(s["pool_level"], s["capacity"]))
        text.append(f"  {s['pool_level']:,}/{s['capacity']:,} bytes\n")
        text.append(f"  Admitted: {s['bytes_admitted']:,} bytes")
        text.append(f"  Withdrawn: {s['bytes_withdrawn']:,} bytes\n")
        text.append(f"  Frames: {s['frames_admitted']}/{s['frames_seen']} admitted", style="dim")
        return Panel(text, title="🏊 Entropy Pool", border_style="green")

    def _build_quality_panel(self) -> Panel:
        threshold = self.engine.config.quality_threshold
        last = self.engine.last_quality
        text = Text()
        text.append("  Quality: ", style="bold")
        text.append(f"{last:.2f}", style="green" if last > threshold else "red")
        text.append(f"  (threshold {threshold:.2f})\n", style="dim")
        text.append("  ")
        text.append(_sparkline(list(self._quality_history), width=50), style="cyan")
        return Panel(text, title="🎙️ Signal", border_style="cyan")

    def _build_bytes_panel(self) -> Panel:
        if self._last_whitened:
            body = _hex_dump(self._last_whitened)
        else:
            body = Text("[waiting for an admitted frame...]", style="dim")
        return Panel(body, title="🔬 Last Whitened Bytes", border_style="magenta")

    def _build_layout(self) -> Layout:
        """Build the full dashboard layout."""
        self._observe()
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=8),
        )

        elapsed = time.monotonic() - self._start_time if self._start_time else 0
        header = Text()
        header.append("  🎙️ AUDIORANDO MONITOR", style="bold magenta")
        header.append(f"  │  source {self.source.name}", style="cyan")
        header.append(f"  │  uptime {int(elapsed)}s", style="dim")
        header.append("  │  [Ctrl+C] quit", style="bright_black")
        layout["header"].update(Panel(header, border_style="bright_black"))

        layout["body"].split_row(
            Layout(self._build_pool_panel(), name="pool"),
            Layout(self._build_quality_panel(), name="quality"),
        )
        layout["footer"].update(self._build_bytes_panel())
        return layout

    def run(self) -> None:
        """Run the live monitor until Ctrl+C or the source ends."""
        self.console.clear()
        self._start_time = time.monotonic()
        self.harvester.start()

        def _sigint(sig, frame):
            self.harvester.stop(timeout=0)

        old_handler = signal.signal(signal.SIGINT, _sigint)

        try:
            with Live(
                self._build_layout(),
                console=self.console,
                refresh_per_second=max(1, int(1 / self.refresh_rate)) if self.refresh_rate > 0 else 2,
                screen=True,
            ) as live:
                while self.harvester.running:
                    live.update(self._build_layout())
                    time.sleep(self.refresh_rate)
        except KeyboardInterrupt:
            pass
        finally:
            self.harvester.stop()
            signal.signal(signal.SIGINT, old_handler)
            self.console.clear()
            self.console.print("[green]Monitor stopped.[/]")
            s = self.engine.status()
            elapsed = time.monotonic() - self._start_time
            self.console.print(f"  Frames: {s['frames_admitted']}/{s['frames_seen']} admitted")
            self.console.print(f"  Pool: {s['pool_level']:,}/{s['capacity']:,} bytes")
            self.console.print(f"  Uptime: {elapsed:.0f}s")
            if self.harvester.error is not None:
                self.console.print(f"[red]Source error: {self.harvester.error}[/]")
