"""Concrete checks available to a quality line."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from src.quality_gate.build import BuildContext
from src.quality_gate.dependency_parsers import (
    BannedDependencyAnalysis,
    DependencyAnalysis,
    parse_banned_dependencies,
    parse_dependency_analysis,
)
from src.quality_gate.log_parser import BuildLogParser, Goal
from src.quality_gate.report import StepReport
from src.quality_gate.results import Result
from src.quality_gate.steps import BuildStep, Step

logger = logging.getLogger(__name__)


class BuildResultCheck(Step):
    """Mirrors the result the build system reported for the build."""

    kind = "build_result"

    def __init__(self, name: str = "Build result") -> None:
        super().__init__(name)

    @property
    def description(self) -> str:
        return "Build finished successfully"

    def do_step(self, build: BuildContext, report: StepReport) -> None:
        if build.result is Result.SUCCESS:
            report.set_result(Result.SUCCESS, "Build succeeded")
        elif build.result is Result.UNSTABLE:
            report.set_result(Result.UNSTABLE, "Build is unstable")
        else:
            report.set_result(
                Result.FAILURE, f"Build did not succeed ({build.result.value})"
            )


# ---------------------------------------------------------------------------
# Log based dependency checks
# ---------------------------------------------------------------------------


class DependencyDeclarationCheck(BuildStep):
    """Reports unused and undeclared dependencies found by dependency:analyze."""

    kind = "dependency_declaration"

    def __init__(self, name: str = "Dependency declaration") -> None:
        super().__init__(name)

    @property
    def description(self) -> str:
        return "Check dependency declarations with dependency:analyze"

    def create_log_parser(self) -> BuildLogParser:
        return BuildLogParser()

    def analyse_dependency_section(self, section: str) -> DependencyAnalysis:
        return parse_dependency_analysis(section)

    def do_step(self, build: BuildContext, report: StepReport) -> None:
        parser = self.create_log_parser()
        parser.parse(build.log)
        section = parser.section_for(Goal.DEPENDENCY_ANALYSE)
        if section is None:
            report.set_result(
                Result.SUCCESS, "No occurrence of dependency:analyze in build log"
            )
            return

        analysis = self.analyse_dependency_section(section)
        logger.debug(
            "Build %s: dependency analysis found %d undeclared, %d unused",
            build.build_id,
            analysis.undeclared_count,
            analysis.unused_count,
        )
        reason = (
            f"{analysis.undeclared_count} undeclared, "
            f"{analysis.unused_count} unused dependencies"
        )
        if analysis.undeclared_count + analysis.unused_count > 0:
            report.set_result(Result.UNSTABLE, reason)
        else:
            report.set_result(Result.SUCCESS, reason)


class BannedDependencyCheck(BuildStep):
    """Fails when the enforcer plugin reported banned dependencies."""

    kind = "banned_dependencies"

    def __init__(self, name: str = "Banned dependencies") -> None:
        super().__init__(name)

    @property
    def description(self) -> str:
        return "Check for banned dependencies reported by enforcer:enforce"

    def create_log_parser(self) -> BuildLogParser:
        return BuildLogParser()

    def analyse_banned_section(self, section: str) -> BannedDependencyAnalysis:
        return parse_banned_dependencies(section)

    def do_step(self, build: BuildContext, report: StepReport) -> None:
        parser = self.create_log_parser()
        parser.parse(build.log)
        section = parser.section_for(Goal.BANNED_DEPENDENCY_ANALYSE)
        if section is None:
            report.set_result(
                Result.SUCCESS, "No occurrence of enforcer:enforce in build log"
            )
            return

        analysis = self.analyse_banned_section(section)
        logger.debug(
            "Build %s: enforcer reported %d banned dependencies",
            build.build_id,
            analysis.count,
        )
        if analysis.count > 0:
            report.set_result(
                Result.FAILURE,
                f"{analysis.count} banned dependencies: "
                + ", ".join(analysis.banned),
            )
        else:
            report.set_result(Result.SUCCESS, "0 banned dependencies")


# ---------------------------------------------------------------------------
# XML checks
# ---------------------------------------------------------------------------


class XPathExpressionCountCheck(BuildStep):
    """Counts the elements an ElementTree path matches in a workspace file.

    Thresholds
    ----------
    success_threshold : int
        Counts up to this value pass.
    warning_threshold : int
        Counts above ``success_threshold`` up to this value are unstable;
        anything above fails.
    """

    kind = "xpath_count"

    def __init__(
        self,
        target_file: str,
        expression: str,
        success_threshold: int = 0,
        warning_threshold: int = 0,
        name: str = "",
    ) -> None:
        super().__init__(name or f"Count of {expression}")
        self.target_file = target_file
        self.expression = expression
        self.success_threshold = success_threshold
        self.warning_threshold = max(warning_threshold, success_threshold)

    @property
    def description(self) -> str:
        return f"Count of {self.expression} in {self.target_file}"

    def count_is_success(self, count: int) -> bool:
        return count <= self.success_threshold

    def count_is_warning(self, count: int) -> bool:
        return count <= self.warning_threshold

    def do_step(self, build: BuildContext, report: StepReport) -> None:
        path = Path(build.workspace) / self.target_file
        root = ET.parse(path).getroot()
        try:
            count = len(root.findall(self.expression))
        except (SyntaxError, KeyError) as exc:
            logger.warning(
                "Build %s: invalid path expression %r: %s",
                build.build_id,
                self.expression,
                exc,
            )
            report.set_result(
                Result.FAILURE,
                f"{self.name}: invalid expression '{self.expression}' ({exc})",
            )
            return

        if count == 0:
            report.set_result(Result.SUCCESS, f"{self.name}: No occurrence")
        elif self.count_is_success(count):
            report.set_result(
                Result.SUCCESS,
                f"{self.name}: {count} <= success threshold({self.success_threshold})",
            )
        elif self.count_is_warning(count):
            report.set_result(
                Result.UNSTABLE,
                f"{self.name}: success threshold({self.success_threshold}) < "
                f"{count} <= warning threshold({self.warning_threshold})",
            )
        else:
            report.set_result(
                Result.FAILURE,
                f"{self.name}: warning threshold({self.warning_threshold}) < {count}",
            )
