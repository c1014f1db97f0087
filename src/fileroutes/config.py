"""fileroutes configuration.

RoutesConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class RoutesConfig:
    """Configuration for route generation, registration, and watching.

    Attributes:
        root: Project root that relative paths resolve against.
              Always resolved to an absolute path on construction.
        routes_dir: Directory scanned for route modules.
        output: Target file for the generated module.
        write: Persist the generated module to ``output`` (``False`` keeps it
            in memory, e.g. for the virtual module).
        verbose: Emit diagnostic logging to stderr.
        externals: Glob patterns for files under ``routes_dir`` to ignore.
        annotate: Add a type annotation to the generated registration
            function's signature.
        debounce_ms: Watcher debounce window in milliseconds.

    """

    root: Path = field(default_factory=Path.cwd)
    routes_dir: str = "src/routes"
    output: Path = field(default_factory=lambda: Path("src/generated_routes.py"))
    write: bool = True
    verbose: bool = False
    externals: tuple[str, ...] = ()
    annotate: bool = False
    debounce_ms: int = 300

    def __post_init__(self) -> None:
        # watchfiles reports absolute paths; relative_to() needs an absolute root.
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        if not isinstance(self.output, Path):
            object.__setattr__(self, "output", Path(self.output))
        if not isinstance(self.externals, tuple):
            object.__setattr__(self, "externals", tuple(self.externals))

    @property
    def routes_path(self) -> Path:
        """Absolute path to the routes directory."""
        path = Path(self.routes_dir)
        if path.is_absolute():
            return path
        return self.root / path

    @property
    def output_path(self) -> Path:
        """Absolute path to the generated module."""
        if self.output.is_absolute():
            return self.output
        return self.root / self.output
