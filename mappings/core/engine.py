"""
Mapping Load Engine
====================

Orchestrates one mapping file load: size check, a single blocking read,
ProGuard parsing and symbol table construction.

Loading is all-or-nothing.  A new :class:`SymbolTable` is built
completely before it replaces the published one, and the replacement is
a single reference assignment, so a reader of :attr:`MappingEngine.table`
sees either the old table or the new one, never a half-built table.

Failures propagate to the caller unchanged:

    - ``OSError`` / ``UnicodeDecodeError`` when the file cannot be read;
    - :class:`MalformedMappingError` when a line is malformed;
    - :class:`MappingLoadError` when the file exceeds the size limit.

Callers running this at startup should treat any of them as fatal.
"""

from __future__ import annotations

from pathlib import Path

from shared.config import AlloyConfig
from shared.logger import AlloyLogger

from mappings.core.errors import MappingError, MappingLoadError
from mappings.core.symbol_table import SymbolTable
from mappings.parsers.proguard import ProGuardParser


class MappingEngine:
    """Loads ProGuard mapping files into a published :class:`SymbolTable`.

    Usage::

        engine = MappingEngine()
        table = engine.load("cache/1.21.4/client_mappings.txt")
        entity = table.find_class("net.minecraft.world.entity.Entity")
    """

    def __init__(
        self,
        config: AlloyConfig | None = None,
        logger: AlloyLogger | None = None,
    ) -> None:
        """Initialise the engine.

        Args:
            config: Alloy configuration.  Defaults are used if not provided.
            logger: Logger instance.  A new one is created if not provided.
        """
        self._config: AlloyConfig = config or AlloyConfig()
        self._logger: AlloyLogger = logger or AlloyLogger("mappings.engine")
        self._parser = ProGuardParser(
            drop_inlined_methods=self._config.mappings.drop_inlined_methods,
            logger=self._logger,
        )
        self._table: SymbolTable | None = None
        self._source: Path | None = None

    # ------------------------------------------------------------------ #
    #  Published state
    # ------------------------------------------------------------------ #

    @property
    def table(self) -> SymbolTable:
        """The most recently loaded symbol table.

        Raises:
            MappingLoadError: If nothing has been loaded yet.
        """
        table = self._table
        if table is None:
            raise MappingLoadError("no mapping file has been loaded")
        return table

    @property
    def source(self) -> Path | None:
        """Path of the file the published table was loaded from."""
        return self._source

    @property
    def loaded(self) -> bool:
        return self._table is not None

    # ------------------------------------------------------------------ #
    #  Loading
    # ------------------------------------------------------------------ #

    def load(self, path: str | Path) -> SymbolTable:
        """Read, parse and publish the mapping file at *path*.

        Returns:
            The newly published table.
        """
        file_path = Path(path)
        with self._logger.operation("load"):
            try:
                text = self._read(file_path)
                table = self.build(text)
            except (MappingError, OSError, UnicodeDecodeError) as exc:
                self._logger.error(
                    "Failed to load %s: %s", file_path, exc, source=str(file_path)
                )
                raise
            self._table = table
            self._source = file_path
            stats = table.stats
            self._logger.info(
                "Loaded %d classes, %d fields, %d methods from %s",
                stats.class_count,
                stats.field_count,
                stats.method_count,
                file_path,
                source=str(file_path),
                **stats.model_dump(),
            )
        return table

    def reload(self) -> SymbolTable:
        """Rebuild the table from the last loaded file and swap it in.

        On failure the previously published table stays in place.

        Raises:
            MappingLoadError: If nothing has been loaded yet.
        """
        source = self._source
        if source is None:
            raise MappingLoadError("reload requested before any load")
        try:
            return self.load(source)
        except (MappingError, OSError, UnicodeDecodeError):
            self._logger.warning(
                "Reload failed; keeping the table loaded from %s", source
            )
            raise

    def build(self, text: str) -> SymbolTable:
        """Parse mapping *text* into a new table without publishing it."""
        with self._logger.operation("parse"), self._logger.timed("mapping parse"):
            classes = self._parser.parse_text(text)
        return SymbolTable(classes)

    def _read(self, file_path: Path) -> str:
        size = file_path.stat().st_size
        max_size = self._config.mappings.max_file_size
        if size > max_size:
            raise MappingLoadError(
                f"mapping file too large: {size:,} bytes (max: {max_size:,} bytes)"
            )
        self._logger.debug("Reading %s (%d bytes)", file_path, size)
        return file_path.read_text(encoding=self._config.mappings.encoding)
