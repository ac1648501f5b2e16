from __future__ import annotations

from typing import Any, Dict, List

from .context import ProvisionCtx

RULE = "-" * 70


def render_summary(ctx: ProvisionCtx, state: Dict[str, Any]) -> str:
    """Operator next steps. Pure formatting."""

    profile = ctx.profile
    ports = ", ".join(str(p) for p in profile.firewall_ports)
    lines: List[str] = [
        "",
        "Installation complete",
        RULE,
        "",
        "Before continuing, ensure the following:",
        "",
        "  - Firewall:",
        f"        Open ports {ports} on this host and any cloud firewall.",
        "",
        f"  - Binary: {ctx.binary_path}",
    ]

    dns = state.get("dns")
    if dns is not None:
        lines.append(f"  - DNS ({ctx.target.domain}): {dns.status}")

    cert = state.get("certificate")
    if cert is not None:
        lines += [
            f"  - Certificate: {cert.cert_path}",
            f"  - Private key: {cert.key_path}",
        ]

    lines += [
        "",
        "To launch:",
        "",
        f'    cd "{ctx.work_dir}"',
        f"    ./{ctx.artifact.binary_name}",
    ]

    if profile.admin_url:
        admin = profile.admin_url.replace("{ip}", ctx.target.public_ip).replace("{domain}", ctx.target.domain)
        lines += ["", f"Admin portal: {admin}"]

    if profile.launch_notes:
        lines.append("")
        lines += [f"  {note}" for note in profile.launch_notes]

    lines += ["", RULE, ""]
    return "\n".join(lines)
