"""Named reactive outputs: render definitions re-run when the inputs they read change."""

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, Mapping, MutableMapping, Optional, Set

from utils.logger import get_logger

logger = get_logger("dashboard.outputs")

TABLE = "table"
PLOT = "plot"
MAP = "map"
OUTPUT_KINDS = (TABLE, PLOT, MAP)

# Stands in for an input that did not exist when a definition read it
_MISSING = object()


@dataclass(frozen=True)
class RenderSpec:
  """A render definition registered under an output id."""
  output_id: str
  kind: str
  func: Callable[[], Any]


@dataclass
class CacheEntry:
  """Last rendered value and the input values it was computed from."""
  value: Any
  dependencies: Dict[str, Any] = field(default_factory=dict)

  def is_stale(self, inputs: Mapping[str, Any]) -> bool:
    return any(
        inputs.get(key, _MISSING) != seen
        for key, seen in self.dependencies.items()
    )


class ReactiveInputs(Mapping):
  """
  Read-only view of the current input values.

  While a render definition runs, every key it reads is recorded so the
  definition only re-runs when one of those inputs changes.
  """

  def __init__(self, values: Optional[Mapping[str, Any]] = None):
    self._values: Dict[str, Any] = dict(values or {})
    self._reads: Optional[Set[str]] = None

  def __getitem__(self, key: str) -> Any:
    if self._reads is not None:
      self._reads.add(key)
    try:
      return self._values[key]
    except KeyError:
      raise KeyError(f"No input named {key!r}, available: {sorted(self._values)}") from None

  def __iter__(self) -> Iterator[str]:
    return iter(self._values)

  def __len__(self) -> int:
    return len(self._values)

  def set_values(self, values: Mapping[str, Any]) -> None:
    self._values = dict(values)

  @contextmanager
  def track(self) -> Iterator[Set[str]]:
    """Record the keys read inside the block."""
    reads: Set[str] = set()
    previous, self._reads = self._reads, reads
    try:
      yield reads
    finally:
      self._reads = previous


class OutputTable:
  """
  Mapping from output ids to render definitions.

  Definitions take no arguments and read inputs through ``outputs.input``:

      outputs = OutputTable()

      @outputs.render_table("irisTable")
      def iris_table():
          return load_iris_frame()

  Rendered values live in a caller-supplied cache (one per session), so
  the table itself holds no per-session state.
  """

  def __init__(self, name: str = "outputs"):
    self.name = name
    self.input = ReactiveInputs()
    self._specs: Dict[str, RenderSpec] = {}

  def register(self, output_id: str, kind: str, func: Callable[[], Any]) -> RenderSpec:
    """
    Register a render definition.

    Raises:
        ValueError: For a duplicate id or an unknown kind
    """
    if kind not in OUTPUT_KINDS:
      raise ValueError(f"Unknown output kind {kind!r}, expected one of {OUTPUT_KINDS}")
    if output_id in self._specs:
      raise ValueError(f"Output {output_id!r} is already registered")

    spec = RenderSpec(output_id=output_id, kind=kind, func=func)
    self._specs[output_id] = spec
    logger.debug(f"Registered {kind} output {output_id!r}")
    return spec

  def _decorator(self, output_id: str, kind: str):
    def decorator(func: Callable[[], Any]) -> Callable[[], Any]:
      self.register(output_id, kind, func)
      return func
    return decorator

  def render_table(self, output_id: str):
    """Register a definition returning a DataFrame."""
    return self._decorator(output_id, TABLE)

  def render_plot(self, output_id: str):
    """Register a definition returning a matplotlib Figure."""
    return self._decorator(output_id, PLOT)

  def render_map(self, output_id: str):
    """Register a definition returning a pydeck Deck."""
    return self._decorator(output_id, MAP)

  def __getitem__(self, output_id: str) -> RenderSpec:
    try:
      return self._specs[output_id]
    except KeyError:
      raise KeyError(
          f"No output named {output_id!r}, registered: {list(self._specs)}"
      ) from None

  def __contains__(self, output_id: object) -> bool:
    return output_id in self._specs

  def __iter__(self) -> Iterator[str]:
    return iter(self._specs)

  def __len__(self) -> int:
    return len(self._specs)

  def _cache_key(self, output_id: str) -> str:
    return f"{self.name}:{output_id}"

  def evaluate(
      self,
      output_id: str,
      inputs: Mapping[str, Any],
      cache: MutableMapping[str, Any],
  ) -> Any:
    """
    Get the rendered value of an output.

    The definition runs on first use and again whenever an input it read
    last time has a different value; otherwise the cached value is returned.

    Args:
        output_id: Registered output id
        inputs: Current input values
        cache: Per-session storage for rendered values

    Returns:
        The rendered value (DataFrame, Figure or Deck)

    Raises:
        KeyError: For an unknown output id
    """
    spec = self[output_id]
    key = self._cache_key(output_id)

    entry = cache.get(key)
    if entry is not None and not entry.is_stale(inputs):
      logger.debug(f"Output {output_id!r} unchanged")
      return entry.value

    self.input.set_values(inputs)
    with self.input.track() as reads:
      value = spec.func()

    dependencies = {k: inputs.get(k, _MISSING) for k in reads}
    cache[key] = CacheEntry(value=value, dependencies=dependencies)

    reason = "first render" if entry is None else "inputs changed"
    logger.info(
        f"Rendered {spec.kind} output {output_id!r} ({reason}, depends on {sorted(reads) or 'nothing'})"
    )
    return value

  def evaluate_all(
      self,
      inputs: Mapping[str, Any],
      cache: MutableMapping[str, Any],
  ) -> Dict[str, Any]:
    """Evaluate every output in registration order."""
    return {output_id: self.evaluate(output_id, inputs, cache) for output_id in self._specs}

  def invalidate(self, cache: MutableMapping[str, Any], output_id: Optional[str] = None) -> None:
    """Drop cached values (one output, or all of them) so they re-render."""
    ids = [output_id] if output_id is not None else list(self._specs)
    for oid in ids:
      cache.pop(self._cache_key(oid), None)
