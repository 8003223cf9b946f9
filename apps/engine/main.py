#!/usr/bin/env python3
"""
Main CLI entrypoint for the linear recurrence explorer.

Loads a YAML configuration, runs the fixed or evolving-W recurrence, prints
the final value and evolution equations, and optionally writes a chart and
recordings.
"""
import argparse
import copy
import logging
import sys
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from pkgs.inputs import DEFAULT_A0, DEFAULT_X0, DEFAULT_W, DEFAULT_W_EVOLVE, DEFAULT_STEPS
from pkgs.observability import setup_logging
from apps.engine.engine_service import EngineService
from apps.engine.schemas import CalculateRequest

logger = logging.getLogger('EngineMain')

DEFAULT_CONFIG: Dict[str, Any] = {
    'log_level': 'INFO',
    'enable_recorder': True,
    'variant': 'auto',
    'parameters': {
        'a0': list(DEFAULT_A0),
        'x0': DEFAULT_X0,
        'w': [list(r) for r in DEFAULT_W],
        'w_evolve': [list(r) for r in DEFAULT_W_EVOLVE],
        'steps': DEFAULT_STEPS
    },
    'display': {
        'show_coefficients': False,
        'show_transition_matrix': False
    },
    'output': {
        'recordings_path': None,
        'chart_path': None
    }
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively overlay ``override`` on a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class EngineRunner:
    """Runs one configured calculation through the engine service."""

    def __init__(self, config_path: Optional[str], overrides: Optional[Dict[str, Any]] = None):
        self.config_path = config_path
        self.config = _merge(self._load_config(), overrides or {})
        self.engine = EngineService(self.config)

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML, falling back to the defaults."""
        if not self.config_path:
            return copy.deepcopy(DEFAULT_CONFIG)
        try:
            with open(self.config_path, 'r') as f:
                loaded = yaml.safe_load(f) or {}
            if not isinstance(loaded, dict):
                logger.error(f"Config {self.config_path} is not a mapping, using defaults")
                return copy.deepcopy(DEFAULT_CONFIG)
            logger.info(f"Loaded configuration from {self.config_path}")
            if isinstance(loaded.get('parameters'), dict) and 'w_evolve' not in loaded['parameters'] \
                    and 'W_evolve' not in loaded['parameters']:
                # a file without an evolution matrix describes the fixed variant
                base = _merge(DEFAULT_CONFIG, {'parameters': {'w_evolve': None}})
                return _merge(base, loaded)
            return _merge(DEFAULT_CONFIG, loaded)
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load config from {self.config_path}: {e}")
            return copy.deepcopy(DEFAULT_CONFIG)

    def build_request(self) -> CalculateRequest:
        params = dict(self.config['parameters'])
        if 'W_evolve' in params:
            params['w_evolve'] = params.pop('W_evolve')
        if 'w0' in params:
            params['w'] = params.pop('w0')
        return CalculateRequest(variant=self.config.get('variant', 'auto'), **params)

    def run(self) -> bool:
        """Initialize, calculate, report and export. Returns True on success."""
        try:
            req = self.build_request()
        except ValidationError as e:
            logger.error(f"Invalid parameters in configuration: {e}")
            return False

        result = self.engine.init(req)
        if not result['success']:
            logger.error(f"Engine initialization failed: {result['message']}")
            return False

        calc = result['calculation']

        print(f"Variant: {calc.variant}")
        print("Evolution equations:")
        for line in calc.equations:
            print(f"  {line}")
        print(f"Final value: {calc.message}")

        display = self.config.get('display', {})
        output = self.config.get('output', {})
        ok = True

        if output.get('chart_path'):
            rendered = self.engine.render_chart(
                output['chart_path'],
                show_coefficients=display.get('show_coefficients', False),
                show_transition_matrix=display.get('show_transition_matrix', False)
            )
            ok = ok and rendered['success']
            logger.info(rendered['message'])

        if output.get('recordings_path'):
            saved = self.engine.save_recordings(output['recordings_path'])
            ok = ok and saved['success']
            logger.info(saved['message'])

        return ok

    def shutdown(self):
        self.engine.shutdown()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Linear recurrence explorer')
    parser.add_argument(
        '--config', '-c',
        default=None,
        help='Path to YAML configuration file (default: built-in parameters)'
    )
    parser.add_argument(
        '--variant',
        choices=['fixed', 'drift', 'auto'],
        default=None,
        help='Recurrence variant; auto picks drift when an evolution matrix is configured'
    )
    parser.add_argument('--steps', type=int, default=None, help='Number of steps (clamped to 5..100)')
    parser.add_argument('--plot', default=None, help='Write the chart to this image path')
    parser.add_argument('--show-coefficients', action='store_true', help='Add the coefficient chart')
    parser.add_argument('--show-w', action='store_true', help='Add the W evolution chart')
    parser.add_argument('--record', default=None, help='Base path for CSV/JSONL/Parquet recordings')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging')
    return parser


def overrides_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if args.variant:
        overrides['variant'] = args.variant
    if args.steps is not None:
        overrides['parameters'] = {'steps': args.steps}
    display = {}
    if args.show_coefficients:
        display['show_coefficients'] = True
    if args.show_w:
        display['show_transition_matrix'] = True
    if display:
        overrides['display'] = display
    output = {}
    if args.plot:
        output['chart_path'] = args.plot
    if args.record:
        output['recordings_path'] = args.record
    if output:
        overrides['output'] = output
    if args.verbose:
        overrides['log_level'] = 'DEBUG'
    return overrides


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    runner = EngineRunner(args.config, overrides_from_args(args))
    setup_logging(runner.config.get('log_level', 'INFO'))

    try:
        return 0 if runner.run() else 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    finally:
        runner.shutdown()


if __name__ == '__main__':
    sys.exit(main())
