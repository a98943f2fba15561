from chromaroll.agents import HumanAgent, SolverAgent, parse_direction
from chromaroll.core.config import AgentConfig, BoardConfig
from chromaroll.core.registry import AGENT_REGISTRY
from chromaroll.environment import RollerEnvironment
from chromaroll.game.game_core import Color, Direction


def _env(grid):
    env = RollerEnvironment(BoardConfig())
    obs = env.reset(grid)
    return env, obs


def test_registry_has_both_agents():
    assert AGENT_REGISTRY["solver"] is SolverAgent
    assert AGENT_REGISTRY["human"] is HumanAgent


def test_parse_direction():
    assert parse_direction("w") == Direction.UP
    assert parse_direction(" A ") == Direction.LEFT
    assert parse_direction("Down") == Direction.DOWN
    assert parse_direction("d") == Direction.RIGHT
    assert parse_direction("jump") is None


def test_scripted_actions(uniform_grid):
    env, obs = _env(uniform_grid(Color.RED))
    agent = HumanAgent(AgentConfig(type="human", actions=["w", "right", "bogus", "a", "quit", "s"]))

    moves = [agent.act(obs, env) for _ in range(4)]
    assert moves == [Direction.UP, Direction.RIGHT, Direction.LEFT, None]

    agent.reset()
    assert agent.act(obs, env) == Direction.UP


def test_scripted_actions_run_out(uniform_grid):
    env, obs = _env(uniform_grid(Color.RED))
    agent = HumanAgent(AgentConfig(type="human", actions=["d"]))
    assert agent.act(obs, env) == Direction.RIGHT
    assert agent.act(obs, env) is None


def test_action_list_from_file(tmp_path, uniform_grid):
    path = tmp_path / "moves.txt"
    path.write_text("# opening\nw\n\nd\n")
    env, obs = _env(uniform_grid(Color.RED))
    agent = HumanAgent(AgentConfig(type="human"))
    agent.set_action_list(str(path))
    assert [agent.act(obs, env), agent.act(obs, env)] == [Direction.UP, Direction.RIGHT]


def test_console_input(uniform_grid, capsys):
    env, obs = _env(uniform_grid(Color.YELLOW))
    keys = iter(["", "hint", "fly", "d", "quit"])
    agent = HumanAgent(AgentConfig(type="human"), input_fn=lambda prompt: next(keys))

    assert agent.act(obs, env) == Direction.RIGHT
    assert "Solver path: right" in capsys.readouterr().out
    assert agent.act(obs, env) is None


def test_console_eof_stops(uniform_grid):
    def closed(prompt):
        raise EOFError

    env, obs = _env(uniform_grid(Color.RED))
    agent = HumanAgent(AgentConfig(type="human"), input_fn=closed)
    assert agent.act(obs, env) is None


def test_solver_agent_follows_and_replans(uniform_grid):
    env, obs = _env(uniform_grid(Color.YELLOW))
    agent = SolverAgent(AgentConfig())

    first = agent.act(obs, env)
    assert first == Direction.RIGHT
    assert agent.plans_made == 1

    obs = env.step(first)
    agent.act(obs, env)
    assert agent.plans_made == 2


def test_solver_agent_stops_when_nothing_reachable():
    grid = [[Color.MATCHED] * 5 for _ in range(5)]
    grid[2][2] = Color.START
    env, obs = _env(grid)
    assert SolverAgent(AgentConfig()).act(obs, env) is None


def test_solver_autoplay_matches_reference_run():
    env = RollerEnvironment(BoardConfig(seed=13))
    obs = env.reset()
    agent = SolverAgent(AgentConfig())

    from chromaroll.game.solver import simulate_optimal_clear
    from chromaroll.game.game_core import INITIAL_CUBE_FACES, START_POS
    sim = simulate_optimal_clear(env.game_state.initial_grid, START_POS, INITIAL_CUBE_FACES)

    for _ in range(1000):
        direction = agent.act(obs, env)
        if direction is None:
            break
        obs = env.step(direction)
        if obs.done:
            break

    assert obs.moves == sim.moves
    assert obs.matched_count == sim.matched_count
    if sim.cleared:
        assert obs.done and env.par.moves == sim.moves
