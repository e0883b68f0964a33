"""
📊 Fitness Tracker
Running best fitness across generations of a run
"""

from collections import deque
from typing import Any, Dict, List, Optional

import numpy as np

from genopt.core.logger import get_logger

logger = get_logger(__name__)


class FitnessTracker:
    """
    Record per-generation best fitness and the best seen so far.

    The optimizer keeps no elite, so a generation's best can drop below an
    earlier one. The running maximum kept here never decreases.
    """

    def __init__(self, history_size: int = 10000):
        """
        Args:
            history_size: Number of generations kept in the history
        """
        self.history_size = history_size

        self.fitness_history = deque(maxlen=history_size)
        self.running_best_history = deque(maxlen=history_size)
        self.best_fitness = -float('inf')
        self.best_value: Optional[Any] = None
        self.improvement_count = 0
        self.generations_without_improvement = 0

    def update(self, fitness: float, value: Any = None) -> bool:
        """
        Record one generation's best fitness.

        Args:
            fitness: Best fitness of the generation
            value: Decoded value achieving ``fitness``

        Returns:
            bool: True if the running best improved
        """
        self.fitness_history.append(fitness)

        improved = fitness > self.best_fitness
        if improved:
            self.best_fitness = fitness
            self.best_value = value
            self.improvement_count += 1
            self.generations_without_improvement = 0
            logger.debug(f"New best fitness {fitness:.6f} at value {value}")
        else:
            self.generations_without_improvement += 1

        self.running_best_history.append(self.best_fitness)
        return improved

    @property
    def generations(self) -> int:
        return len(self.fitness_history)

    def get_running_best(self) -> List[float]:
        return list(self.running_best_history)

    def get_info(self) -> Dict[str, Any]:
        """Summary of the tracked run."""
        history = np.asarray(self.fitness_history, dtype=float)
        return {
            'generations': self.generations,
            'best_fitness': self.best_fitness,
            'best_value': self.best_value,
            'total_improvements': self.improvement_count,
            'generations_without_improvement': self.generations_without_improvement,
            'mean_generation_best': float(history.mean()) if history.size else None,
            'std_generation_best': float(history.std()) if history.size else None,
        }

    def reset(self):
        """Forget everything tracked so far."""
        self.fitness_history.clear()
        self.running_best_history.clear()
        self.best_fitness = -float('inf')
        self.best_value = None
        self.improvement_count = 0
        self.generations_without_improvement = 0
