import multiprocessing
import os
from argparse import ArgumentParser, BooleanOptionalAction, Namespace
from dataclasses import replace
from multiprocessing.managers import DictProxy
from pathlib import Path

import plotly.graph_objects as go  # type: ignore
from plotly.subplots import make_subplots  # type: ignore

from intrusion_sim.config import Sweep, load_config, load_sweep
from intrusion_sim.experiments import outcome_rates, run_many
from intrusion_sim.intrusion import Config, EndCondition

RESULTS_DIR_PATH: Path = (
    (Path(__file__).absolute().parent.parent).joinpath("results").joinpath("sweep")
)


def start_test(
    config: Config,
    runs: int,
    result: DictProxy,  # type: ignore
) -> None:
    point: tuple[int, int] = (config.attack_success_probability, config.detect_probability)
    print(f"\nStarting {runs} simulations with:\n{config}\n", flush=True)

    rates: dict[EndCondition, float] = outcome_rates(run_many(config, runs))
    result[point] = {condition.name: rate for condition, rate in rates.items()}

    print(
        f"\nResults for success={point[0]}% detect={point[1]}%:\n"
        + "\n".join(f"{condition.name}: {rate:.1%}" for condition, rate in rates.items()),
        flush=True,
    )


if __name__ == "__main__":
    os.makedirs(RESULTS_DIR_PATH, exist_ok=True)

    parser: ArgumentParser = ArgumentParser()
    parser.add_argument("config", help="configuration file")
    parser.add_argument("--runs", type=int, help="simulations per point (overrides the config file)")
    parser.add_argument(
        "--multiprocessing", default=False, action=BooleanOptionalAction
    )
    args: Namespace = parser.parse_args()

    base: Config = load_config(args.config)
    sweep: Sweep = load_sweep(args.config)
    runs: int = args.runs if args.runs is not None else sweep.runs

    manager = multiprocessing.Manager()
    result: DictProxy = manager.dict()  # type: ignore
    processes: list[multiprocessing.Process] = []
    try:
        for success in sweep.attack_success:
            for detect in sweep.detect:
                config: Config = replace(
                    base, attack_success_probability=success, detect_probability=detect
                )
                if args.multiprocessing:
                    process = multiprocessing.Process(
                        target=start_test, args=(config, runs, result)
                    )
                    processes.append(process)
                    process.start()
                else:
                    start_test(config, runs, result)
        for process in processes:
            process.join()
    except KeyboardInterrupt as e:
        for process in processes:
            process.kill()
        raise e

    fig: go.Figure = make_subplots(rows=1, cols=1)
    colors: list[str] = ["#003f5c", "#58508d", "#bc5090", "#ff6361", "#ffa600"]
    for i, success in enumerate(sweep.attack_success):
        fig.append_trace(  # type: ignore
            go.Scatter(
                x=sweep.detect,
                y=[result[(success, detect)][EndCondition.NETWORK_CONQUERED.name] for detect in sweep.detect],
                line_color=colors[i % len(colors)],
                line_width=3,
                name=f"{success}%",
                mode="lines+markers",
                showlegend=True,
                legendgroup=1,
            ),
            row=1,
            col=1,
        )
    fig.update_layout(  # type: ignore
        {
            "autosize": False,
            "height": 720,
            "width": 1080,
            "title": {
                "text": f"Attacker wins over {runs} simulations, n={base.num_computers}",
                "x": 0.5,
                "xanchor": "center",
            },
            "legend_title_text": "attack success",
            "xaxis_title": "detect probability (%)",
            "yaxis_title": "fraction of simulations won by the attacker",
        }
    )
    fig.update_yaxes({"range": [0, 1], "tick0": 0, "dtick": 0.1})  # type: ignore
    fig.write_image(RESULTS_DIR_PATH.joinpath(f"n{base.num_computers}.pdf"))  # type: ignore
