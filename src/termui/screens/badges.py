"""Static gallery of badges, tags and status dots."""

from __future__ import annotations

from typing import TYPE_CHECKING

from termui.ansi import bold, cyan, gray, green, magenta, pad_end, red, white, yellow
from termui.layout import center_line, join_columns
from termui.screen import BaseScreen
from termui.widgets import badge, dot_badge, key_hints, outlined_badge, rule, screen_header

if TYPE_CHECKING:
    from termui.session import Session

SERVICES = (
    ("API Gateway", "online", green),
    ("Database", "online", green),
    ("Cache Layer", "degraded", yellow),
    ("CDN", "online", green),
    ("Auth Service", "offline", red),
    ("Queue Worker", "online", green),
    ("Search Index", "degraded", yellow),
    ("Email Service", "offline", red),
)

VERSIONS = (
    ("v1.0.0", "stable", green, 10),
    ("v2.1.0", "latest", cyan, 12),
    ("v3.0.0", "beta", yellow, 6),
    ("v0.9.0", "alpha", magenta, 6),
    ("v2.0.5", "deprecated", red, 8),
)


class BadgesScreen(BaseScreen):
    title = "Badges"
    description = "Status tags"

    def init_state(self, session: Session) -> None:
        return None

    def render(self, session: Session) -> str:
        cols = session.cols
        lines = screen_header("Badges & Tags", "Status indicators and label components", cols, session.theme)

        solid = [
            badge("Success", "success"),
            badge("Error", "error"),
            badge("Warning", "warning"),
            badge("Info", "info"),
            badge("Neutral", "neutral"),
        ]
        lines.append(center_line(bold(white("Solid Badges")), cols))
        lines.append(center_line("  ".join(solid), cols))
        lines.append("")

        outlined = [
            outlined_badge("active", green),
            outlined_badge("pending", yellow),
            outlined_badge("failed", red),
            outlined_badge("paused", cyan),
            outlined_badge("archived", gray),
        ]
        lines.append(center_line(bold(white("Outlined Badges")), cols))
        lines.append(center_line("  ".join(outlined), cols))
        lines.append("")

        status = [bold(white("Status Dots"))]
        status.extend(
            dot_badge(pad_end(label, 14), color) + " " + outlined_badge(state, color)
            for label, state, color in SERVICES
        )

        versions = [bold(white("Version Tags"))]
        versions.extend(
            bold(white(label.ljust(9))) + pad_end(bold(color(f"[{tag}]")), 14) + color("─" * bar)
            for label, tag, color, bar in VERSIONS
        )

        lines.extend(center_line(line, cols) for line in join_columns([status, versions], gap=6))
        lines.append("")
        lines.append(rule(44, cols))
        lines.append(key_hints([("q", "Back")], cols))
        return "\n".join(lines)
