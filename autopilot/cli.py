import click


@click.group()
def main() -> None:
    """Autopilot - Autonomous workspace agent service."""


@main.command()
@click.option("--host", default=None, help="Bind host (default: from AUTOPILOT_HOST or 0.0.0.0).")
@click.option("--port", default=None, type=int, help="Bind port (default: from AUTOPILOT_PORT or 8000).")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development.")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the Agent Service server."""
    import uvicorn

    from autopilot.agent_service.settings import AutopilotSettings

    settings = AutopilotSettings()

    uvicorn.run(
        "autopilot.agent_service.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="warning",  # uvicorn's own logging is intercepted by loguru
    )


# ---------------------------------------------------------------------------
# Knowledge / workspace helpers
# ---------------------------------------------------------------------------


@main.command()
@click.argument("query")
@click.option("--domain", default=None, help="Restrict results to one knowledge domain.")
@click.option("--limit", default=3, show_default=True, type=int, help="Maximum number of entries.")
def search(query: str, domain: str | None, limit: int) -> None:
    """Search the curated knowledge base."""
    from autopilot.agent_service.knowledge.search import load_knowledge_base
    from autopilot.agent_service.models.enums import KnowledgeDomain

    try:
        domain_filter = KnowledgeDomain(domain) if domain else None
    except ValueError:
        choices = ", ".join(d.value for d in KnowledgeDomain)
        msg = f"Unknown domain '{domain}'. Choose from: {choices}"
        raise click.BadParameter(msg, param_hint="--domain") from None

    entries = load_knowledge_base().search(query, domain_filter, limit=limit)
    if not entries:
        click.echo("No matching knowledge entries.")
        return

    for entry in entries:
        click.echo(f"{entry.title} ({entry.domain.value})")
        click.echo(f"  {entry.summary}")


@main.command()
def seed() -> None:
    """Print a fresh seed workspace as JSON."""
    from autopilot.agent_service.models.workspace import seed_workspace

    click.echo(seed_workspace().model_dump_json(by_alias=True, indent=2))


if __name__ == "__main__":
    main()
