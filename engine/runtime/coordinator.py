"""
Candelabra Coordinator

Keeps one candelabra per symbol and serializes ingestion into it.
Readers get immutable snapshots and never block writers for longer than a
dictionary lookup.
"""

import logging
import threading
from typing import Any, Dict, List, Optional, Sequence

from schemas.market_data import Sample
from schemas.candelabra import Candelabra, TierConfig
from ..candelabra import create, ingest, ingest_batch
from ..errors import require_non_empty

logger = logging.getLogger(__name__)


class CandelabraCoordinator:
    """
    Coordinates candelabra state for many symbols.

    The coordinator:
    1. Creates a candelabra from the first sample seen for a symbol
    2. Routes every later sample through ingest()
    3. Hands out the latest immutable state per symbol
    4. Counts accepted, dropped and duplicate samples

    Example usage:
        loader = ConfigLoader(Path("config"))
        coordinator = CandelabraCoordinator(loader.load("intraday"))

        coordinator.ingest("ES", Sample(timestamp, 4321.25))
        state = coordinator.snapshot("ES")
    """

    def __init__(self, tier_configs: Sequence[TierConfig]):
        """
        Initialize coordinator with the tier layout every symbol uses.

        Args:
            tier_configs: Tier configurations, finest first

        Raises:
            EmptyInputError: If tier_configs is empty
        """
        self.tier_configs = list(require_non_empty(tier_configs, "tier configs"))
        self._states: Dict[str, Candelabra] = {}
        self._lock = threading.Lock()

        self._samples_received = 0
        self._samples_unchanged = 0

        logger.info(
            f"Coordinator initialized with tiers: "
            f"{[config.name for config in self.tier_configs]}"
        )

    def ingest(self, symbol: str, sample: Sample) -> Candelabra:
        """
        Ingest one sample for a symbol.

        Args:
            symbol: Trading symbol (e.g., "ES", "NQ")
            sample: Incoming sample

        Returns:
            The symbol's state after ingestion
        """
        with self._lock:
            self._samples_received += 1
            state = self._states.get(symbol)

            if state is None:
                state = create(sample, self.tier_configs)
                logger.info(f"Created candelabra for {symbol}")
            else:
                updated = ingest(sample, state)
                if updated is state:
                    self._samples_unchanged += 1
                state = updated

            self._states[symbol] = state
            return state

    def ingest_batch(self, symbol: str, samples: Sequence[Sample]) -> Candelabra:
        """
        Ingest samples for a symbol in the given order.

        Raises:
            EmptyInputError: If samples is empty
        """
        require_non_empty(samples, "samples")

        with self._lock:
            self._samples_received += len(samples)
            state = self._states.get(symbol)
            remaining = samples

            if state is None:
                state = create(samples[0], self.tier_configs)
                remaining = samples[1:]
                logger.info(f"Created candelabra for {symbol}")

            if remaining:
                state = ingest_batch(remaining, state)

            self._states[symbol] = state
            logger.debug(f"Ingested batch of {len(samples)} samples for {symbol}")
            return state

    def snapshot(self, symbol: str) -> Optional[Candelabra]:
        """Latest state for a symbol, or None if it has never been seen"""
        with self._lock:
            return self._states.get(symbol)

    def symbols(self) -> List[str]:
        with self._lock:
            return sorted(self._states)

    def reset(self, symbol: Optional[str] = None) -> None:
        """
        Forget state for one symbol, or for every symbol when none is given.

        Args:
            symbol: Symbol to reset; None resets all
        """
        with self._lock:
            if symbol is None:
                logger.info(f"Resetting all {len(self._states)} candelabras")
                self._states.clear()
            elif self._states.pop(symbol, None) is not None:
                logger.info(f"Reset candelabra for {symbol}")
            else:
                logger.warning(f"Reset requested for unknown symbol: {symbol}")

    def get_metrics(self) -> Dict[str, Any]:
        """
        Get coordinator metrics.

        Returns:
            Dictionary with coordinator statistics
        """
        with self._lock:
            return {
                "symbols": len(self._states),
                "tiers": [config.name for config in self.tier_configs],
                "samples_received": self._samples_received,
                "samples_unchanged": self._samples_unchanged,
                "buffered_samples": {
                    symbol: len(state.samples) for symbol, state in self._states.items()
                },
            }
