"""
Backpropagation demo.

Trains a small network on a boolean function and reports the result:
1. Builds the network with a seeded random initialization
2. Trains it with batch gradient descent (reverse-mode AD gradients)
3. Prints predictions and the computation graph summary
4. Optionally saves the error curve and a markdown report

    python -m nn_backprop.demo --problem xor --layers 3,1
"""

import argparse
import time
import warnings

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt

from .aad import use_tape
from .aad.core.graph_utils import graph_stats, format_graph_stats
from .network import create_network, evaluate_network, NonConvergenceWarning
from .training import Trainer, TrainingConfig, batch_error, get_dataset, DATASETS


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Train a feedforward network by backpropagation',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--problem', type=str, default='xor', choices=sorted(DATASETS),
                        help='Training set')
    parser.add_argument('--layers', type=str, default='3,1',
                        help='Comma-separated neuron counts per layer, output layer last')
    parser.add_argument('--eta', type=float, default=0.9,
                        help='Learning rate')
    parser.add_argument('--epsilon', type=float, default=0.005,
                        help='Error threshold for convergence')
    parser.add_argument('--timeout', type=int, default=10000,
                        help='Maximum number of iterations')
    parser.add_argument('--seed', type=int, default=0,
                        help='Seed for weight initialization')
    parser.add_argument('--log-every', type=int, default=1000,
                        help='Progress print interval')
    parser.add_argument('--plot', type=str, default=None,
                        help='Save the error curve to this path')
    parser.add_argument('--report', type=str, default=None,
                        help='Write a markdown report to this path')
    parser.add_argument('--quiet', action='store_true',
                        help='Suppress progress output')
    return parser.parse_args(argv)


def parse_layers(layer_str):
    """Parse '3,1' into [3, 1]."""
    return [int(s) for s in layer_str.split(',') if s.strip()]


def plot_errors(errors, title, save_path):
    fig, ax = plt.subplots(figsize=(8, 5))
    ax.plot(np.arange(len(errors)), errors, linewidth=1.5)
    ax.set_yscale('log')
    ax.set_xlabel('Iteration')
    ax.set_ylabel('Mean squared error')
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.close(fig)


def build_report(args, trainer, elapsed, predictions):
    md_lines = []
    md_lines.append(f"# Backpropagation: {args.problem.upper()}\n")
    md_lines.append("## Training\n")
    errors = trainer.error_history
    table_rows = [
        ["Layers", f"{trainer.network.input_size} -> {trainer.network.layer_sizes}"],
        ["eta", f"{args.eta}"],
        ["epsilon", f"{args.epsilon}"],
        ["Timeout", f"{args.timeout}"],
        ["Seed", f"{args.seed}"],
        ["Status", trainer.status.value],
        ["Iterations", f"{len(errors)}"],
        ["Final error", f"{errors[-1]:.6e}" if errors else "N/A"],
        ["Runtime", f"{elapsed:.2f} s"],
    ]
    df_main = pd.DataFrame(table_rows, columns=["Metric", "Value"])
    md_lines.append(df_main.to_markdown(index=False))
    md_lines.append("")

    md_lines.append("## Predictions\n")
    df_pred = pd.DataFrame(predictions)
    md_lines.append(df_pred.to_markdown(index=False, floatfmt=".4f"))
    md_lines.append("")

    md_lines.append("## Weights\n")
    for i, wb in enumerate(trainer.network.weight_values()):
        md_lines.append(f"### Layer {i}\n")
        columns = [f"w{k}" for k in range(wb.shape[1] - 1)] + ["b"]
        df_w = pd.DataFrame(wb, columns=columns,
                            index=[f"N{j}" for j in range(wb.shape[0])])
        md_lines.append(df_w.to_markdown(floatfmt=".4f"))
        md_lines.append("")
    return "\n".join(md_lines)


def main(argv=None):
    args = parse_args(argv)
    examples = get_dataset(args.problem)
    layers = parse_layers(args.layers)
    n_inputs = len(examples[0][0])
    verbose = not args.quiet

    if verbose:
        print("=" * 70)
        print(f"BACKPROPAGATION DEMO: {args.problem.upper()}")
        print("=" * 70)
        print(f"  Network: {n_inputs} inputs -> layers {layers}")
        print(f"  eta={args.eta}, epsilon={args.epsilon}, timeout={args.timeout}, seed={args.seed}")

    net = create_network(n_inputs, layers, rng=args.seed)
    config = TrainingConfig(eta=args.eta, epsilon=args.epsilon, timeout=args.timeout,
                            verbose=verbose, log_every=args.log_every)
    trainer = Trainer(net, examples, config)

    t0 = time.perf_counter()
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter('always', NonConvergenceWarning)
        for _ in trainer.steps():
            pass
    elapsed = time.perf_counter() - t0
    for w in caught:
        print(f"Warning: {w.message}")

    predictions = []
    for x, target in examples:
        out = evaluate_network(x, net)
        row = {f"x{i}": v for i, v in enumerate(x)}
        row.update({f"target{i}": v for i, v in enumerate(target)})
        row.update({f"output{i}": v for i, v in enumerate(out)})
        predictions.append(row)

    if verbose:
        print(f"\nStatus: {trainer.status.value} after {len(trainer.error_history)} iterations "
              f"({elapsed:.2f}s)")
        print(pd.DataFrame(predictions).to_string(index=False))
        with use_tape():
            print(format_graph_stats(graph_stats(batch_error(net, examples))))

    if args.plot:
        plot_errors(trainer.error_history,
                    f"{args.problem.upper()} {n_inputs}->{layers}", args.plot)
        print(f"Figure saved to: {args.plot}")

    if args.report:
        with open(args.report, "w") as f_md:
            f_md.write(build_report(args, trainer, elapsed, predictions))
        print(f"Markdown report generated: {args.report}")

    return trainer


if __name__ == "__main__":
    main()
