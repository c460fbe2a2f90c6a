import logging
from pathlib import Path
from typing import Dict

import click
from rich.console import Console
from rich.logging import RichHandler

from ai_factory.agents import agent_ids, get_agent_config
from ai_factory.config import create_default_config, load_config, migrate_config, save_config
from ai_factory.constants import CONFIG_FILENAME, DEFAULT_AGENT_ID
from ai_factory.errors import AiFactoryError
from ai_factory.mcp import configure_mcp, get_mcp_instructions
from ai_factory.models import MCP_OPTION_KEYS, AiFactoryConfig, McpOptions
from ai_factory.skills.installer import InstallOptions, SkillInstaller
from ai_factory.tui.renderers import FactoryConsoleUI


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("ai_factory")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(
            RichHandler(
                console=Console(stderr=True),
                show_time=False,
                show_path=False,
                markup=False,
            )
        )


def _project_dir_argument():
    return click.argument(
        "project_dir",
        required=False,
        default=".",
        type=click.Path(file_okay=False, path_type=Path),
    )


def _load_existing(project_dir: Path) -> AiFactoryConfig | None:
    try:
        return load_config(project_dir)
    except AiFactoryError as exc:
        raise click.ClickException(str(exc))


def _config_for_agent(existing: AiFactoryConfig | None, agent_id: str) -> AiFactoryConfig:
    if existing is None:
        return create_default_config(agent_id)
    if existing.agent == agent_id:
        return existing
    payload = existing.as_dict()
    payload["agent"] = agent_id
    payload.pop("skillsDir")
    return migrate_config(payload)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", is_flag=True, help="Show debug output.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Install agent skills and MCP servers into a project."""
    ctx.obj = {}
    _configure_logging(verbose)


@cli.command(help="Install skills and MCP servers into a project.")
@_project_dir_argument()
@click.option(
    "--agent",
    type=click.Choice(agent_ids(), case_sensitive=False),
    default=None,
    help="Target agent (defaults to the configured one, then claude).",
)
@click.option("--skill", "skills", multiple=True, help="Skill to install (repeatable).")
@click.option("--stack", default=None, help="Install the template skills of a stack.")
@click.option(
    "--mcp",
    "mcp_servers",
    multiple=True,
    type=click.Choice(list(MCP_OPTION_KEYS), case_sensitive=False),
    help="MCP server to configure (repeatable).",
)
@click.pass_obj
def init(
    obj: Dict[str, str],
    project_dir: Path,
    agent: str | None,
    skills: tuple[str, ...],
    stack: str | None,
    mcp_servers: tuple[str, ...],
) -> None:
    ui = FactoryConsoleUI(Console())
    project_dir = project_dir.expanduser().resolve()
    project_dir.mkdir(parents=True, exist_ok=True)

    existing = _load_existing(project_dir)
    agent_id = agent.lower() if agent else (existing.agent if existing else DEFAULT_AGENT_ID)
    config = _config_for_agent(existing, agent_id)

    installer = SkillInstaller()
    requested = list(skills) or installer.available_skills()
    try:
        installed = installer.install_skills(
            InstallOptions(
                project_dir=project_dir,
                skills_dir=config.skills_dir,
                skills=requested,
                stack=stack,
                agent_id=config.agent,
            )
        )
        options = McpOptions.from_mapping(
            {key: True for key in mcp_servers}, defaults=config.mcp
        )
        servers = configure_mcp(project_dir, options, config.agent)
    except AiFactoryError as exc:
        raise click.ClickException(f"Fatal: {exc}")

    config.installed_skills = installed
    config.mcp = options
    save_config(project_dir, config)

    ui.render_result(
        config,
        mode="init",
        skills=installed,
        servers=servers,
        instructions=get_mcp_instructions(servers),
    )
    if any(skill not in installed for skill in requested):
        raise click.exceptions.Exit(1)


@cli.command(help="Reinstall skills from the current catalog.")
@_project_dir_argument()
@click.pass_obj
def update(obj: Dict[str, str], project_dir: Path) -> None:
    ui = FactoryConsoleUI(Console())
    project_dir = project_dir.expanduser().resolve()

    config = _load_existing(project_dir)
    if config is None:
        raise click.ClickException(
            f"No {CONFIG_FILENAME} found in {project_dir}. Run init first."
        )

    try:
        installed = SkillInstaller().update_skills(config, project_dir)
        servers = configure_mcp(project_dir, config.mcp, config.agent)
    except AiFactoryError as exc:
        raise click.ClickException(f"Fatal: {exc}")

    config.installed_skills = installed
    save_config(project_dir, config)

    ui.render_result(
        config,
        mode="update",
        skills=installed,
        servers=servers,
        instructions=get_mcp_instructions(servers),
    )


@cli.command(help="List bundled skills and stack templates.")
@click.pass_obj
def skills(obj: Dict[str, str]) -> None:
    ui = FactoryConsoleUI(Console())
    installer = SkillInstaller()
    stacks = {
        stack: installer.catalog.list_stack_skills(stack)
        for stack in installer.available_templates()
    }
    ui.render_catalog(installer.available_skills(), stacks)


@cli.command(help="List supported agents and their conventions.")
@click.pass_obj
def agents(obj: Dict[str, str]) -> None:
    ui = FactoryConsoleUI(Console())
    ui.render_agents([get_agent_config(agent_id) for agent_id in agent_ids()])


def main() -> int:
    try:
        cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
