#!/usr/bin/env python3
"""
wwvb-decoder: WWVB Time Code Frame Decoder

Main entry point. This program:
1. Captures 120 seconds of carrier-level samples from a GPIO pin, or reads
   a previously saved capture, or synthesizes one
2. Finds the sample that best works as the start of a frame
3. Decodes time, day, year, LYI, LSW and DST with error scores
4. Prints the report and optionally writes JSON and saves the capture

Usage:
    # Live capture on GPIO4 (needs pigpiod)
    wwvb-decoder

    # Decode a saved capture and dump the frame
    wwvb-decoder -i capture.bin -p

    # Capture and keep the samples for later
    wwvb-decoder -o capture.bin

    # Decode a synthetic capture with 200 flipped samples
    wwvb-decoder --simulate 2025-11-19T14:30 --offset 1234 --noise 200

Configuration (TOML, all optional):
    [sampling]
    sample_period_ms = 25
    buffer_seconds = 120
    gpio = 4

    [reliability]
    likely_ok_below = 7
    not_reliable_below = 10

    [output]
    json_path = "/var/lib/wwvb/last_decode.json"
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, List
import toml

# Set up logging before imports that use it
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger('wwvb-decoder')

from .decoder import DecoderConfig, WWVBDecoder
from .interfaces.errors import WWVBDecodeError
from .output.report import format_frame_dump, format_report
from .output.result_writer import ResultWriter
from .timing.sample_buffer import SampleBuffer
from .timing.wwvb_encoder import WWVBEncoder


DEFAULT_CONFIG: Dict[str, Any] = {
    'sampling': {
        'sample_period_ms': 25,
        'buffer_seconds': 120,
        'gpio': 4,
    },
    'reliability': {
        'likely_ok_below': 7,
        'not_reliable_below': 10,
    },
    'output': {
        'json_path': '',
    },
}


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from TOML file.

    Tables and keys missing from the file take their default values.
    """
    config = {section: dict(values) for section, values in DEFAULT_CONFIG.items()}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            logger.warning(f"Config file {path} not found, using defaults")
            return config
        with open(path, 'r') as f:
            loaded = toml.load(f)
        for section, values in loaded.items():
            if isinstance(values, dict):
                config.setdefault(section, {}).update(values)
            else:
                config[section] = values

    return config


def simulate_buffer(
    when: str,
    config: DecoderConfig,
    offset: int = 0,
    noise: int = 0,
    seed: Optional[int] = None
) -> SampleBuffer:
    """Synthesize a capture for the UTC minute when (ISO 8601)."""
    encoder = WWVBEncoder(config.samples_per_second)
    buffer = encoder.encode_buffer(
        datetime.fromisoformat(when), offset=offset, length=config.buffer_length
    )
    if noise:
        buffer = SampleBuffer(
            encoder.flip_samples(buffer.samples, noise, seed=seed),
            config.samples_per_second
        )
    logger.info(f"Simulated {when} at offset {offset} with {noise} flipped samples")
    return buffer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='wwvb-decoder: decode the WWVB time code from a carrier-level capture',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Live capture from the receiver
    wwvb-decoder

    # Offline decode of a saved capture, printing the frame
    wwvb-decoder -i capture.bin -p

    # Use a config file and write JSON
    wwvb-decoder -c /etc/wwvb-decoder.toml --json /tmp/wwvb.json
        """
    )

    parser.add_argument(
        '--input', '-i',
        help='Read samples from file rather than GPIO'
    )
    parser.add_argument(
        '--output', '-o',
        help='Write samples to file'
    )
    parser.add_argument(
        '--print-frame', '-p',
        action='store_true',
        help='ASCII print the frame'
    )
    parser.add_argument(
        '--config', '-c',
        help='Path to TOML configuration file'
    )
    parser.add_argument(
        '--json',
        help='Write the decode result as JSON to this file (overrides config)'
    )
    parser.add_argument(
        '--gpio',
        type=int,
        help='BCM GPIO number of the receiver output (overrides config)'
    )
    parser.add_argument(
        '--simulate',
        metavar='ISO_TIME',
        help='Decode a synthesized capture of this UTC minute instead of capturing'
    )
    parser.add_argument(
        '--offset',
        type=int,
        default=0,
        help='Frame start sample for --simulate (default: 0)'
    )
    parser.add_argument(
        '--noise',
        type=int,
        default=0,
        help='Number of samples to flip for --simulate (default: 0)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        help='Random seed for --noise'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    config_dict = load_config(args.config)

    # Apply command-line overrides
    if args.gpio is not None:
        config_dict['sampling']['gpio'] = args.gpio
    if args.json:
        config_dict['output']['json_path'] = args.json

    try:
        config = DecoderConfig.from_dict(config_dict)
    except (WWVBDecodeError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    fill_time = None
    try:
        if args.input:
            source = args.input
            buffer = SampleBuffer.from_file(
                args.input,
                samples_per_second=config.samples_per_second,
                capacity=config.buffer_length
            )
        elif args.simulate:
            source = 'simulated'
            buffer = simulate_buffer(args.simulate, config, args.offset, args.noise, args.seed)
        else:
            from .capture.gpio_sampler import fill_buffer_gpio
            source = 'gpio'
            buffer, fill_time = fill_buffer_gpio(
                gpio=config.gpio,
                sample_period_ms=config.sample_period_ms,
                length=config.buffer_length
            )

        result = WWVBDecoder(config).decode(buffer, source=source, fill_time_usec=fill_time)

    except OSError as e:
        logger.error(f"Could not read capture: {e}")
        return 1
    except WWVBDecodeError as e:
        logger.error(str(e))
        return 1
    except ValueError as e:
        logger.error(f"Invalid argument: {e}")
        return 2

    dump = format_frame_dump(buffer, result.sync.start_sample) if args.print_frame else None
    print(format_report(result, dump))

    json_ok = True
    if config.json_path:
        json_ok = ResultWriter(config.json_path).write(result)

    if args.output:
        try:
            buffer.save(args.output)
        except OSError as e:
            logger.warning(f"Could not write samples to {args.output}: {e}")

    # the capture is still saved when the JSON write fails
    return 0 if json_ok else 1


if __name__ == '__main__':
    sys.exit(main())
