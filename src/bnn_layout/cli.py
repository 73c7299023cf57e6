# File location: bnn-layout/src/bnn_layout/cli.py

"""
Command line entry point.

    bnn-layout count "3,2,tanh;2,3,tanh;1,2,sigmoid"
    bnn-layout forward "1,2,sigmoid" --params theta.npy --input 1.0,2.0
"""

import argparse
import logging
import sys

import jax.numpy as jnp
import numpy as np

from .core.errors import BNNLayoutError
from .core.shapes import num_params, parse_network_shape
from .models.forward import network_forward

logger = logging.getLogger(__name__)


def _parse_vector(text: str) -> jnp.ndarray:
    try:
        return jnp.array([float(v) for v in text.split(',') if v.strip()])
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected comma-separated numbers, got {text!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='bnn-layout',
        description='Decode flat parameter vectors into dense networks and evaluate them.'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    commands = parser.add_subparsers(dest='command', required=True)

    count = commands.add_parser('count', help='Print the number of flat parameters a shape needs')
    count.add_argument('shape', help='Network shape, e.g. "3,2,tanh;1,3,sigmoid"')

    fwd = commands.add_parser('forward', help='Evaluate a stored flat parameter vector')
    fwd.add_argument('shape', help='Network shape, e.g. "3,2,tanh;1,3,sigmoid"')
    fwd.add_argument('--params', required=True, help='.npy file holding the flat parameter vector')
    fwd.add_argument('--input', required=True, type=_parse_vector,
                     help='Comma-separated input vector')
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s'
    )

    try:
        shape = parse_network_shape(args.shape)
        if args.command == 'count':
            print(num_params(shape))
            return 0

        try:
            loaded = np.load(args.params)
        except (OSError, ValueError) as e:
            print(f"bnn-layout: error: cannot read {args.params}: {e}", file=sys.stderr)
            return 1
        if not isinstance(loaded, np.ndarray):
            print(f"bnn-layout: error: {args.params} does not hold a single .npy array", file=sys.stderr)
            return 1

        flat = jnp.asarray(loaded)
        logger.debug("Loaded %d parameters from %s", flat.size, args.params)
        output = network_forward(flat, shape, args.input)
        print(','.join(f"{float(v):.6g}" for v in np.asarray(output)))
        return 0
    except BNNLayoutError as e:
        print(f"bnn-layout: error: {e}", file=sys.stderr)
        return 2


if __name__ == '__main__':
    sys.exit(main())
