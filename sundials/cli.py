"""
Sundial designer for a flat plate of any slant and rotation.

Usage examples:
  sundials --lat 51.5 --lon -0.1 --system apparent --outdir ./out
  sundials --lat 45 --lon 12.3 --slant 90 --rotation 180 --system italian --hour-step 60
  sundials --lat 40 --lon -74 --system standard --tz -5 --day-step 3
  sundials --lat 19 --lon -155 --system standard --tz=-10:00

Notes:
- Geometry is in render units: the nodus sits `--style-length` from the style
  foot and the drawing spans +/- 15 units.
- The standard time system needs a time zone; without --tz it is derived
  from the longitude. Zones with minutes that start with "-" need the
  --tz=-3:30 form, or argparse takes the value for an option.
"""
import argparse
import logging
import math

from sundials.dial import DialOptions, build_dial
from sundials.plot import plot_and_export
from sundials.timebase import clock_string_to_minutes, time_zone_to_string
from sundials.timesystems import DeclinationClamp, TimeSystem

logger = logging.getLogger(__name__)


def parse_time_zone(text: str) -> float:
    """'+1', '-3:30', '5' -> minutes ahead of UTC."""
    sign = 1
    body = text.strip()
    if body[:1] in ("+", "-"):
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    minutes = clock_string_to_minutes(body)
    if math.isnan(minutes):
        raise argparse.ArgumentTypeError(f"invalid time zone: {text!r}")
    return sign * minutes


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Sundial designer: hour curves for a flat plate under several hour systems.")
    p.add_argument("--lat", type=float, required=True, help="Latitude in degrees (+N).")
    p.add_argument("--lon", type=float, required=True, help="Longitude in degrees (East positive).")
    p.add_argument("--slant", type=float, default=0.0, help="Plate slant in degrees: 0 horizontal, 90 vertical (default 0).")
    p.add_argument("--rotation", type=float, default=180.0, help="Azimuth the plate faces in degrees (default 180, south).")
    p.add_argument("--style-length", type=float, default=5.0, help="Distance from style foot to nodus (default 5).")
    p.add_argument("--system", type=str, default="apparent", choices=[s.value for s in TimeSystem],
                   help="Hour system for the hour curves (default apparent).")
    p.add_argument("--tz", type=parse_time_zone, default=None, help="Time zone, e.g. +1, -5 or --tz=-3:30 (default from longitude).")
    p.add_argument("--hour-step", type=int, default=60, help="Minutes between hour curves (default 60).")
    p.add_argument("--day-step", type=int, default=7, help="Days between samples along an hour curve (default 7).")
    p.add_argument("--min-decl", type=float, default=None, help="Clamp sun declination below at this many degrees.")
    p.add_argument("--max-decl", type=float, default=None, help="Clamp sun declination above at this many degrees.")
    p.add_argument("--outdir", type=str, default=".", help="Output directory (default current).")
    p.add_argument("--prefix", type=str, default="sundial", help="Output filename prefix.")
    p.add_argument("--verbose", action="store_true", help="Debug logging.")
    return p.parse_args(argv)


def options_from_args(args) -> DialOptions:
    clamp = DeclinationClamp(
        minimum=None if args.min_decl is None else math.radians(args.min_decl),
        maximum=None if args.max_decl is None else math.radians(args.max_decl),
    )
    return DialOptions(latitude=args.lat,
                       longitude=args.lon,
                       slant=args.slant,
                       rotation=args.rotation,
                       style_length=args.style_length,
                       time_system=TimeSystem(args.system),
                       hour_step=args.hour_step,
                       day_step=args.day_step,
                       clamp=clamp,
                       time_zone=args.tz)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    options = options_from_args(args)
    logger.debug("options: %s", options)
    dial = build_dial(options)
    svg_path = plot_and_export(dial, outdir=args.outdir, prefix=args.prefix)

    print(f"SVG saved to: {svg_path}")
    print(f"Curve CSV written in: {args.outdir}")
    if options.time_system is TimeSystem.STANDARD:
        print(f"Time zone: UTC{time_zone_to_string(options.zone)}")
    if dial.equinox_noon is None:
        print("NOTE: the noon line does not cross the equinox line on this plate.")


if __name__ == "__main__":
    main()
