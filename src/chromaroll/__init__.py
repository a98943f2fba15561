"""
chromaroll: Chromatic Roller

A rolling-cube puzzle on a square grid of colored tiles. Rolling the cube
onto a tile whose color matches the face that lands on it clears the tile;
clear every tile to win, roll off the edge and the game is lost. A
breadth-first solver plays autoplay and scores each board with a par.

Example Usage:
```python
from chromaroll.core.config import load_config
from chromaroll.runner import GameRunner

config = load_config("configs/default.yaml")
runner = GameRunner(config)
runner.setup()
runner.run_benchmark(num_runs=10)
```

Command-line Usage:
```bash
chromaroll play --seed 7
chromaroll autoplay --board board.json --delay 0.6
chromaroll benchmark --config configs/default.yaml --num-runs 10
```
"""

# Normal imports instead of lazy loading to ensure proper registry initialization
from chromaroll.core.config import Config, load_config, validate_config
from chromaroll.runner import GameRunner

__version__ = "0.1.0"

__all__ = [
    "Config",
    "load_config",
    "validate_config",
    "GameRunner",
]
