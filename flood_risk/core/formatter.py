"""Output formatters for risk results."""

import json

from flood_risk.core.models import RiskResult


class MarkdownFormatter:
    """Portfolio summary table for the console."""

    def format(self, result: RiskResult) -> str:
        params = result.params
        summary = result.summary()
        model = result.model_used or "n/a"
        if result.model_fallback:
            model = f"{model} (fallback from {params.model})"

        lines = [
            f"**Flood Risk: {'Assessed' if result.has_data else 'No Hazard Data'}**",
            f"**Scenario:** {params.scenario} | **Year:** {params.year} | **Return Period:** {params.return_period}y",
            f"**Model:** {model} | **Buffer:** {params.buffer_distance:g} m",
            "",
        ]

        if result.records:
            lines.append("| # | Asset | Type | Depth (m) | Damage | Loss | Risk |")
            lines.append("|---|---|---|---|---|---|---|")
            for r in result.records:
                lines.append(
                    f"| {r.asset.id} | {r.asset.name} | {r.asset.asset_class} | {r.depth_used:.3f} "
                    f"| {r.damage_ratio:.1%} | {r.financial_loss:,.0f} | {r.risk_level} |"
                )
            lines.append("")

        if result.dropped_assets:
            lines.append(f"*Not sampled by provider: {', '.join(str(i) for i in result.dropped_assets)}*")
            lines.append("")

        levels = ", ".join(f"{k}: {v}" for k, v in summary["risk_levels"].items() if v)
        lines.extend([
            "---",
            f"**Total Loss:** {summary['total_financial_loss']:,.0f} of {summary['total_asset_value']:,.0f} "
            f"({summary['portfolio_loss_ratio']:.2%})",
            f"**Risk Levels:** {levels or 'none'}",
            f"*Run: {result.duration_seconds:.2f}s*",
        ])

        return "\n".join(lines)


class JSONFormatter:
    """Full result envelope as JSON."""

    def format(self, result: RiskResult) -> dict:
        return result.to_dict()

    def to_json(self, result: RiskResult) -> str:
        return json.dumps(self.format(result), indent=2, default=str)


def format_output(result: RiskResult, fmt: str = "markdown") -> str:
    if fmt == "json":
        return JSONFormatter().to_json(result)
    return MarkdownFormatter().format(result)
