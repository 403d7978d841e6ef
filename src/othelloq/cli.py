"""
Command-line interface for Othello Q-learning.

Commands:
- simulate: Play a batch of games and train the player's Q-table
- play: Play against an agent in the terminal
- init-config: Write the default config to YAML
- show-config: Print a config
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional
import typer
from rich.console import Console

app = typer.Typer(
    name="othq",
    help="Othello with tabular Q-learning - simulate and play",
    no_args_is_help=True,
)

console = Console()


def _load_config(config_path: Optional[Path]):
    from .utils import Config

    if config_path and config_path.exists():
        return Config.load(str(config_path))
    if config_path:
        console.print(f"[yellow]Config {config_path} not found, using defaults[/]")
    return Config()


def _build_agent(agent_config, rng, input_fn=None):
    from .agent import Agent

    return Agent(
        strategy=agent_config.strategy,
        learning_rate=agent_config.learning_rate,
        discount_rate=agent_config.discount_rate,
        epsilon=agent_config.epsilon,
        temperature=agent_config.temperature,
        rng=rng,
        input_fn=input_fn,
    )


@app.command()
def simulate(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config YAML file"
    ),
    games: Optional[int] = typer.Option(
        None, "--games", "-n", help="Number of games to play"
    ),
    board_size: Optional[int] = typer.Option(
        None, "--size", help="Board size (even, >= 2)"
    ),
    player_strategy: Optional[str] = typer.Option(
        None, "--player", "-p", help="Player strategy"
    ),
    opponent_strategy: Optional[str] = typer.Option(
        None, "--opponent", "-o", help="Opponent strategy"
    ),
    learning_rule: Optional[str] = typer.Option(
        None, "--rule", help="monte-carlo, q-learning or sarsa"
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    load: Optional[Path] = typer.Option(
        None, "--load", "-l", help="Load the player's Q-table before playing"
    ),
    save: Optional[Path] = typer.Option(
        None, "--save", "-s", help="Save the player's Q-table after playing"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print every move"),
) -> None:
    """Play a batch of games between the player and the opponent."""
    from .utils import Logger, create_progress, print_config, set_seed, spawn_rngs
    from .play import GameController, Simulator

    config = _load_config(config_path)
    if games is not None:
        config.simulation.num_games = games
    if board_size is not None:
        config.game.board_size = board_size
    if player_strategy is not None:
        config.player.strategy = player_strategy
    if opponent_strategy is not None:
        config.opponent.strategy = opponent_strategy
    if learning_rule is not None:
        config.learning_rule = learning_rule
    if seed is not None:
        config.seed = seed
    if save is not None:
        config.q_table_path = str(save)
    config.game.verbose = config.game.verbose or verbose
    config.ensure_dirs()

    if config.seed is not None:
        set_seed(config.seed)
    player_rng, opponent_rng, game_rng = spawn_rngs(config.seed, 3)

    print_config(config)
    logger = Logger(log_dir=config.log_dir)

    try:
        player = _build_agent(config.player, player_rng)
        opponent = _build_agent(config.opponent, opponent_rng)
        controller = GameController(
            player,
            opponent,
            board_size=config.game.board_size,
            rng=game_rng,
            learning_rule=config.learning_rule,
            verbose=config.game.verbose,
        )
    except ValueError as e:
        logger.log_error(str(e))
        raise typer.Exit(code=1)

    if load is not None:
        player.load_q_table(load)
        logger.log_success(f"Loaded {len(player.q_table)} Q-values from {load}")

    simulator = Simulator(controller, logger=logger)
    num_games = config.simulation.num_games

    logger.log_info(f"Playing {num_games} games: {player.strategy.value} vs {opponent.strategy.value}")
    if config.game.verbose:
        summary = simulator.run(num_games, log_count=config.simulation.log_count)
    else:
        with create_progress() as progress:
            task = progress.add_task("Games", total=num_games)

            def callback(n, result):
                progress.update(task, advance=1)

            summary = simulator.run(
                num_games,
                log_count=config.simulation.log_count,
                progress_callback=callback,
            )

    console.print(f"\n[bold]Results (player perspective):[/]")
    console.print(f"  Wins:   {summary.wins}")
    console.print(f"  Losses: {summary.losses}")
    console.print(f"  Draws:  {summary.draws}")
    console.print(f"  Score:  {summary.score*100:.1f}%")
    console.print(f"  Avg stones: {summary.player_avg_score:.2f} vs {summary.opponent_avg_score:.2f}")
    console.print(f"  Q-table size: {len(player.q_table)}")

    if config.q_table_path:
        player.save_q_table(config.q_table_path)
        logger.log_success(f"Saved Q-table to {config.q_table_path}")


@app.command()
def play(
    strategy: str = typer.Option("greedy", "--ai", "-a", help="Strategy of the computer"),
    q_table: Optional[Path] = typer.Option(
        None, "--q-table", "-q", help="Q-table for the computer (untrained if not specified)"
    ),
    board_size: int = typer.Option(4, "--size", help="Board size (even, >= 2)"),
    games: int = typer.Option(1, "--games", "-n", help="Games to play"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
) -> None:
    """Play against an agent in the terminal."""
    from .agent import Agent
    from .play import PLAYER, GameController, prompt_move
    from .utils import spawn_rngs

    human_rng, ai_rng, game_rng = spawn_rngs(seed, 3)
    try:
        human = Agent("manual", rng=human_rng, input_fn=prompt_move)
        ai = Agent(strategy, rng=ai_rng)
        controller = GameController(human, ai, board_size=board_size, rng=game_rng, verbose=True)
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(code=1)

    if q_table and q_table.exists():
        ai.load_q_table(q_table)
        console.print(f"[green]Playing against a trained {ai.strategy.value} agent[/]")
    else:
        console.print(f"[yellow]Playing against an untrained {ai.strategy.value} agent[/]")

    console.print("\n[bold]Othello[/]")
    console.print("Black is *, white is @. White moves first.\n")

    for _ in range(games):
        result = controller.play_one_game()
        color = result.player_color.name.lower()
        if result.is_draw:
            console.print(f"[yellow]Draw! ({color})[/]")
        elif result.winner == PLAYER:
            console.print(f"[green]You win as {color}! {result.player_score}-{result.opponent_score}[/]")
        else:
            console.print(f"[red]AI wins! You played {color}, {result.player_score}-{result.opponent_score}[/]")

    console.print(
        f"\nYou {controller.player_wins} - AI {controller.opponent_wins} - draws {controller.draws}"
    )


@app.command("init-config")
def init_config(
    output: Path = typer.Option(Path("othelloq.yaml"), "--output", "-o", help="Output file"),
) -> None:
    """Write the default configuration to a YAML file."""
    from .utils import get_default_config

    output.parent.mkdir(parents=True, exist_ok=True)
    get_default_config().save(str(output))
    console.print(f"[green]Wrote default config to {output}[/]")


@app.command("show-config")
def show_config(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config YAML file"
    ),
) -> None:
    """Print a configuration (defaults if no file is given)."""
    from .utils import print_config

    print_config(_load_config(config_path))


if __name__ == "__main__":
    app()
