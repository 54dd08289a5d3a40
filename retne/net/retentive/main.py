"""Contains example logic to drive the evolution and computation of a single
retentive network."""

import argparse

from retne.config import (
    INPUT_COUNT,
    LINK_COLLISION_POLICIES,
    OUTPUT_COUNT,
    RetentiveNetConfig,
)
from retne.net.rng import RandomnessSource

from .compute import step
from .evolution import MutationReport, Net, create


def barebone_run(
    num_generations: int = 5,
    num_steps: int = 5,
    seed: int = 0,
    config: RetentiveNetConfig | None = None,
    verbose: bool = True,
) -> list[float]:
    """Simple working example to demonstrate how to evolve and run a
    retentive network.

    Returns:
        The offspring's outputs after the last time-step
    """
    net: Net = create(INPUT_COUNT, OUTPUT_COUNT, config=config, seed=seed)
    if verbose:
        print("1. Initial net")
        print(net)

    for i in range(num_generations):
        report: MutationReport = net.mutate()
        if verbose:
            print(f"2. Generation {i}: {report}")
            print(net)

    offspring: Net = net.clone()
    if verbose:
        print("3. Offspring")
        print(offspring)

    # Imagine iterating through an environment.
    obs_rng = RandomnessSource(seed)
    outputs: list[float] = []
    for i in range(num_steps):
        obs: list[float] = obs_rng.gaussians(0.0, 1.0, INPUT_COUNT).tolist()
        outputs = step(offspring, obs)
        if verbose:
            print(f"4. Step {i}")
            print(f"   obs: {[round(x, 3) for x in obs]}")
            print(f"   outputs: {[round(y, 3) for y in outputs]}")

    return outputs


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Evolve and run a single retentive network"
    )
    parser.add_argument(
        "--generations", type=int, default=5, help="Mutations to apply (default: 5)"
    )
    parser.add_argument(
        "--steps", type=int, default=5, help="Time-steps to run (default: 5)"
    )
    parser.add_argument("--seed", type=int, default=0, help="Random seed (default: 0)")
    parser.add_argument(
        "--intensity",
        type=float,
        default=1.0,
        help="Mutation intensity multiplier (default: 1.0)",
    )
    parser.add_argument(
        "--collision-policy",
        type=str,
        default="legacy",
        choices=list(LINK_COLLISION_POLICIES),
        help="Link endpoint collision policy (default: legacy)",
    )
    args = parser.parse_args()

    config = RetentiveNetConfig(
        mutation_intensity=args.intensity,
        link_collision_policy=args.collision_policy,
    )
    barebone_run(
        num_generations=args.generations,
        num_steps=args.steps,
        seed=args.seed,
        config=config,
    )


if __name__ == "__main__":
    main()
