"""
Hide / Reset runs across packages.

Each package is processed on its own: a failure is recorded on that package's
result and the run moves on to the next one. Within a package, new exclusions
are written only after the link folder is in place, and the entries this tool
wrote are recorded next to the settings file, so a Hide interrupted at any
step is finished by the next one.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from tqdm import tqdm

from .config import Mode, RunConfig
from .errors import HiddenHeavenError, MissingLinkTarget
from .linker import LinkFolderManager
from .planning.policy import classify_items
from .scanner import list_package_items, normalize_root
from .settings import (
    apply_exclusions,
    clear_exclusions,
    drop_exclusions,
    exclusion_path,
    managed_record_path,
    read_managed_paths,
    remove_managed_record,
    settings_path,
    write_managed_paths,
)


@dataclass
class PackageResult:
    """Outcome of one package's Hide or Reset."""
    root: Path
    mode: Mode
    linked: list[str] = field(default_factory=list)
    excluded: list[str] = field(default_factory=list)
    warnings: list[MissingLinkTarget] = field(default_factory=list)
    changed: bool = False
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RunReport:
    """Aggregated results of a run over all packages."""
    mode: Mode
    results: list[PackageResult] = field(default_factory=list)

    @property
    def failed(self) -> list[PackageResult]:
        return [r for r in self.results if not r.ok]

    @property
    def succeeded(self) -> list[PackageResult]:
        return [r for r in self.results if r.ok]

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0


def hide_package(root: Path, config: RunConfig, linker: LinkFolderManager) -> PackageResult:
    """
    Link and hide the included items of one package.
    
    Steps, each safe to interrupt and resume:
    1. un-hide entries managed before (record or link folder) that are no longer included
    2. refresh the link folder
    3. hide the included items
    4. record the managed entries
    
    Raises:
        HiddenHeavenError: On invalid roots, corrupted link folders or
            malformed settings.
        OSError: On filesystem failures.
    """
    result = PackageResult(root=root, mode=Mode.HIDE)
    settings = settings_path(root)
    record = managed_record_path(root)

    items = list_package_items(root)
    included, excluded = classify_items(items, config.effective_policy())
    current = {exclusion_path(root, name) for name in included}

    # The record survives a lost link folder; the links survive a lost record
    previous = read_managed_paths(record)
    previous |= {
        exclusion_path(root, name)
        for name in linker.read_linked_items(root, config.link_folder_name)
    }
    dropped = drop_exclusions(settings, previous - current)

    outcome = linker.ensure_linked(root, config.link_folder_name, included)

    # Links are in place; now hide them
    applied = apply_exclusions(settings, current)
    recorded = write_managed_paths(record, current)

    result.linked = sorted(included)
    result.excluded = sorted(excluded)
    result.warnings = outcome.warnings
    result.changed = dropped or outcome.changed or applied or recorded
    return result


def reset_package(root: Path, config: RunConfig, linker: LinkFolderManager) -> PackageResult:
    """
    Clear the exclusions of one package and remove its link folder.
    
    Raises:
        HiddenHeavenError: On invalid roots, corrupted link folders or
            malformed settings.
        OSError: On filesystem failures.
    """
    result = PackageResult(root=root, mode=Mode.RESET)

    # Validates the root before anything is written
    list_package_items(root)

    settings_changed = clear_exclusions(settings_path(root))
    folder_removed = linker.remove_link_folder(root, config.link_folder_name)
    record_removed = remove_managed_record(managed_record_path(root))

    result.changed = settings_changed or folder_removed or record_removed
    return result


def run(
    package_roots: Iterable[Path | str],
    config: RunConfig,
    linker: LinkFolderManager | None = None,
    show_progress: bool = False
) -> RunReport:
    """
    Run Hide or Reset over every package.
    
    Args:
        package_roots: Package root directories, processed in the given order.
        config: Resolved run configuration.
        linker: Link folder manager (defaults to the real filesystem).
        show_progress: Show a progress bar.
        
    Returns:
        RunReport with one result per package; failures carry their error.
    """
    linker = linker or LinkFolderManager()
    process = hide_package if config.mode == Mode.HIDE else reset_package
    report = RunReport(mode=config.mode)

    roots = [normalize_root(r) for r in package_roots]

    for root in tqdm(roots, unit="package", disable=not show_progress):
        try:
            result = process(root, config, linker)
        except (HiddenHeavenError, OSError) as e:
            result = PackageResult(root=root, mode=config.mode, error=e)
        report.results.append(result)

    return report
