"""Install bundled skills into a project for a target agent."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ai_factory.agents import AgentProfile, get_agent_config
from ai_factory.constants import DEFAULT_AGENT_ID, SKILL_FILENAME
from ai_factory.errors import MissingSkillFileError
from ai_factory.models import AiFactoryConfig
from ai_factory.skills.catalog import SkillCatalog
from ai_factory.skills.transformers import ISkillTransformer, get_transformer
from ai_factory.template import (
    build_template_vars,
    process_skill_templates,
    process_template,
)
from ai_factory.utils import copy_directory, ensure_dir, read_text, write_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstallOptions:
    project_dir: Path
    skills_dir: str
    skills: list[str] = field(default_factory=list)
    stack: str | None = None
    agent_id: str = DEFAULT_AGENT_ID


class SkillInstaller:
    def __init__(self, catalog: SkillCatalog | None = None) -> None:
        self._catalog = catalog or SkillCatalog()

    @property
    def catalog(self) -> SkillCatalog:
        return self._catalog

    def available_skills(self) -> list[str]:
        return self._catalog.list_skills()

    def available_templates(self) -> list[str]:
        return self._catalog.list_stacks()

    def install_skills(self, options: InstallOptions) -> list[str]:
        agent = get_agent_config(options.agent_id)
        transformer = get_transformer(agent.id)

        installed = self._install_requested(options, agent, transformer)
        transformer.post_install(options.project_dir, options.skills_dir)
        return installed

    def reconcile_custom_skills(
        self, custom_skills: list[str], project_dir: Path, config: AiFactoryConfig
    ) -> list[str]:
        """Reinstall recorded ``stack/skill`` keys under the config's current agent.

        Keys that are malformed or whose template no longer exists are dropped.
        """
        agent = get_agent_config(config.agent)
        transformer = get_transformer(agent.id)

        reconciled = self._reconcile(custom_skills, project_dir, config, agent, transformer)
        transformer.post_install(project_dir, config.skills_dir)
        return reconciled

    def update_skills(self, config: AiFactoryConfig, project_dir: Path) -> list[str]:
        agent = get_agent_config(config.agent)
        transformer = get_transformer(agent.id)

        options = InstallOptions(
            project_dir=project_dir,
            skills_dir=config.skills_dir,
            skills=self.available_skills(),
            stack=None,
            agent_id=agent.id.value,
        )
        base = self._install_requested(options, agent, transformer)
        custom = self._reconcile(
            config.custom_skills, project_dir, config, agent, transformer
        )
        transformer.post_install(project_dir, config.skills_dir)
        return [*base, *custom]

    def _install_requested(
        self,
        options: InstallOptions,
        agent: AgentProfile,
        transformer: ISkillTransformer,
    ) -> list[str]:
        installed: list[str] = []
        ensure_dir(options.project_dir / options.skills_dir)

        for skill in options.skills:
            try:
                self._install_one(
                    self._catalog.skill_dir(skill),
                    skill,
                    options.project_dir,
                    options.skills_dir,
                    agent,
                    transformer,
                )
            except Exception as exc:
                logger.warning('Could not install skill "%s": %s', skill, exc)
                continue
            installed.append(skill)

        if options.stack:
            for template_skill in self._catalog.list_stack_skills(options.stack):
                key = f"{options.stack}/{template_skill}"
                try:
                    self._install_one(
                        self._catalog.template_skill_dir(options.stack, template_skill),
                        template_skill,
                        options.project_dir,
                        options.skills_dir,
                        agent,
                        transformer,
                    )
                except Exception as exc:
                    logger.warning('Could not install skill "%s": %s', key, exc)
                    continue
                installed.append(key)

        return installed

    def _reconcile(
        self,
        custom_skills: list[str],
        project_dir: Path,
        config: AiFactoryConfig,
        agent: AgentProfile,
        transformer: ISkillTransformer,
    ) -> list[str]:
        reconciled: list[str] = []
        for key in custom_skills:
            parts = key.split("/")
            if len(parts) != 2 or not all(parts):
                logger.warning('Invalid custom skill entry "%s". Skipping.', key)
                continue

            stack, template_skill = parts
            if not self._catalog.has_template_skill(stack, template_skill):
                logger.warning('Custom skill source not found for "%s". Skipping.', key)
                continue

            try:
                self._install_one(
                    self._catalog.template_skill_dir(stack, template_skill),
                    template_skill,
                    project_dir,
                    config.skills_dir,
                    agent,
                    transformer,
                )
            except Exception as exc:
                logger.warning('Could not reconcile custom skill "%s": %s', key, exc)
                continue
            reconciled.append(key)
        return reconciled

    @staticmethod
    def _install_one(
        source_dir: Path,
        skill_name: str,
        project_dir: Path,
        skills_dir: str,
        agent: AgentProfile,
        transformer: ISkillTransformer,
    ) -> Path:
        skill_md = source_dir / SKILL_FILENAME
        content = read_text(skill_md)
        if not content:
            raise MissingSkillFileError(skill_md)

        result = transformer.transform(skill_name, content)

        if result.flat:
            target = (
                project_dir / agent.config_dir / result.target_dir / str(result.target_name)
            )
            write_text(target, process_template(result.content, build_template_vars(agent)))
            logger.debug("wrote flat skill %s -> %s", skill_name, target)
            return target

        target_dir = project_dir / skills_dir / result.target_dir
        copy_directory(source_dir, target_dir)
        if result.content != content:
            write_text(target_dir / SKILL_FILENAME, result.content)
        process_skill_templates(target_dir, agent)
        logger.debug("copied skill %s -> %s", skill_name, target_dir)
        return target_dir
