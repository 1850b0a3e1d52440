"""In-memory game registry, lifecycle management, and async tick loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from cube_snake.config import GameConfig
from cube_snake.engine import CubeSnakeEngine
from cube_snake.server.models import GameStatus, GameSummary
from cube_snake.topology import Direction

logger = logging.getLogger(__name__)

# How often the loop samples the clock; ticks fire on the engine's interval.
_FRAME_INTERVAL = 0.02  # seconds
_MAX_GAMES = 100


@dataclass
class GameInstance:
    """All state for a single hosted game."""

    game_id: str
    engine: CubeSnakeEngine
    subscribers: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def status(self) -> GameStatus:
        if self.engine.game_over:
            return GameStatus.FINISHED
        return GameStatus.ACTIVE

    @property
    def tick_interval_ms(self) -> int:
        return round(self.engine.config.tick_interval * 1000)

    def summary(self) -> GameSummary:
        return GameSummary(
            game_id=self.game_id,
            status=self.status,
            grid_size=self.engine.config.grid_size,
            tick_interval_ms=self.tick_interval_ms,
            score=self.engine.score,
        )


class GameManager:
    """Central registry managing all game instances."""

    def __init__(self, max_games: int = _MAX_GAMES) -> None:
        if max_games < 1:
            raise ValueError("max_games must be at least 1.")
        self._games: dict[str, GameInstance] = {}
        self._max_games = max_games

    def create_game(
        self,
        grid_size: int = 10,
        tick_interval_ms: int = 200,
        food_reward: int = 10,
        seed: int | None = None,
    ) -> GameInstance:
        """Create a game and register it. Call :meth:`start` to run it."""
        if len(self._games) >= self._max_games:
            raise ValueError("Too many games; try again later.")
        config = GameConfig(
            grid_size=grid_size,
            tick_interval=tick_interval_ms / 1000.0,
            food_reward=food_reward,
            seed=seed,
        )
        game_id = uuid.uuid4().hex[:12]
        instance = GameInstance(game_id=game_id, engine=CubeSnakeEngine(config))
        self._games[game_id] = instance
        logger.info("Game %s created (grid=%d).", game_id, grid_size)
        return instance

    def start(self, game: GameInstance) -> None:
        """Launch the tick loop for *game* on the running event loop."""
        if game._task is not None and not game._task.done():
            return
        game._task = asyncio.create_task(self._tick_loop(game))

    def get_game(self, game_id: str) -> GameInstance | None:
        return self._games.get(game_id)

    def require_game(self, game_id: str) -> GameInstance:
        game = self._games.get(game_id)
        if game is None:
            raise KeyError(f"Game {game_id} not found.")
        return game

    def list_games(self) -> list[GameSummary]:
        return [g.summary() for g in self._games.values()]

    async def set_direction(self, game_id: str, direction: Direction) -> None:
        game = self.require_game(game_id)
        async with game.lock:
            game.engine.set_direction(direction)

    async def restart(self, game_id: str) -> dict:
        """Reset a game and push the fresh state to subscribers."""
        game = self.require_game(game_id)
        async with game.lock:
            state = game.engine.reset()
        logger.info("Game %s restarted.", game_id)
        await self._broadcast(game, state)
        self.start(game)
        return state

    async def remove_game(self, game_id: str) -> None:
        game = self._games.pop(game_id, None)
        if game is None:
            raise KeyError(f"Game {game_id} not found.")
        await self._stop(game)
        await self._close_connections(game)
        logger.info("Game %s removed.", game_id)

    async def _tick_loop(self, game: GameInstance) -> None:
        """Feed wall-clock deltas to the engine, broadcasting after ticks."""
        last = time.monotonic()
        try:
            while True:
                await asyncio.sleep(_FRAME_INTERVAL)
                now = time.monotonic()
                async with game.lock:
                    ran = game.engine.update(now - last)
                    state = game.engine.get_state() if ran else None
                last = now
                if state is not None:
                    await self._broadcast(game, state)
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled for game %s.", game.game_id)
        except Exception:
            logger.exception("Tick loop error in game %s.", game.game_id)
            await self._finish(game)

    async def _finish(self, game: GameInstance) -> None:
        """End a game whose loop failed and release its subscribers."""
        async with game.lock:
            game.engine.game_over = True
            state = game.engine.get_state()
        await self._broadcast(game, state)
        await self._close_connections(game)

    async def _stop(self, game: GameInstance) -> None:
        task = game._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

    async def _close_connections(self, game: GameInstance) -> None:
        for ws in list(game.subscribers):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Game closed.")
            except Exception:
                logger.warning("Failed closing socket in game %s.", game.game_id)
        game.subscribers.clear()

    async def _broadcast(self, game: GameInstance, state: dict) -> None:
        """Send game state to every connected subscriber."""
        payload = json.dumps(state, separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(game.subscribers):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in game.subscribers:
                game.subscribers.remove(ws)

    async def cleanup(self) -> None:
        """Cancel all running tick loops."""
        tasks = [
            g._task for g in self._games.values()
            if g._task and not g._task.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("GameManager cleanup complete.")
