from __future__ import annotations
import argparse, json, logging, sys

from .binary.reader import parse_lci
from .binary.writer import write_lci
from .models.common import AltitudeType, Datum, ExpectedToMove, ZeroUncertainty
from .models.location import FloorInfo, LocationConfiguration, LocationRecord, UsagePolicy
from .models.report import EncodeOptions, IncludeFlags, LciReport
from .samples import SCENARIOS

logger = logging.getLogger("lcicoder")


def _print_report(report: LciReport) -> None:
    print(json.dumps(report.model_dump(mode="json"), indent=2))


def _split_bssids(values: list[str] | None) -> list[str]:
    out = []
    for v in values or []:
        out.extend(p for p in v.split(",") if p)
    return out


def _record_from_args(args) -> LocationRecord:
    return LocationRecord(
        lci=LocationConfiguration(
            latitude=args.lat,
            longitude=args.lon,
            altitude=args.alt,
            latitude_uncertainty=args.latunc,
            longitude_uncertainty=args.lonunc,
            altitude_uncertainty=args.altunc,
            altitude_type=AltitudeType(args.altitude_type),
            datum=Datum(args.datum),
            regloc_agreement=args.regloc_agreement,
            regloc_dse=args.regloc_dse,
            dependent_sta=args.dependent_sta,
        ),
        floor=FloorInfo(
            expected_to_move=ExpectedToMove(args.expected_to_move),
            floor=args.floor,
            height_above_floor=args.height,
            height_above_floor_uncertainty=args.heightunc,
        ),
        usage=UsagePolicy(
            retransmission_allowed=not args.retransmission_denied,
            retention_expires_present=args.expiration != 0,
            sta_location_policy=args.sta_location_policy,
            expiration=args.expiration,
        ),
        colocated_bssids=_split_bssids(args.bssid),
    )


def _options_from_args(args) -> EncodeOptions:
    return EncodeOptions(
        include=IncludeFlags(lci=not args.no_lci, z=not args.no_z, usage=not args.no_usage,
                             bssids=not args.no_bssids),
        zero_policy=ZeroUncertainty.SMALLEST if args.smallest else ZeroUncertainty.UNKNOWN,
        zero_max_bssid_indicator=args.zero_indicator,
    )


def cmd_decode(args):
    report = parse_lci(args.lci)
    _print_report(report)
    failed = report.has_errors()
    if args.check:
        res = write_lci(report.record)
        print(f"lci={res.lci}")
        failed = failed or res.has_errors()
    return 1 if failed else 0


def cmd_encode(args):
    record = _record_from_args(args)
    if record.colocated_bssids:
        for i, b in enumerate(record.colocated_bssids):
            logger.info(f"colocated BSSID {i}: {b}")
    res = write_lci(record, _options_from_args(args))
    print(f"lci={res.lci}")
    failed = res.has_errors()
    if args.check:
        report = parse_lci(res.lci)
        _print_report(report)
        failed = failed or report.has_errors()
    return 1 if failed else 0


def cmd_sample(args):
    make_record, known = SCENARIOS[args.scenario]
    print(f"Decode {args.scenario}: lci={known}")
    _print_report(parse_lci(known))

    res = write_lci(make_record())
    print(f"Encode {args.scenario}: lci={res.lci}")

    print(f"Decode new {args.scenario}")
    _print_report(parse_lci(res.lci))
    return 0


def build_parser():
    p = argparse.ArgumentParser(prog="lcicoder", description="IEEE 802.11 LCI (RFC 6225) element encoder/decoder")
    p.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("decode", help="decode an LCI hex string and print it as JSON")
    sp.add_argument("lci", help="hex string, optionally prefixed with lci=")
    sp.add_argument("--check", action="store_true", help="encode the decoded record again")
    sp.set_defaults(func=cmd_decode)

    sp = sub.add_parser("encode", help="encode an LCI hex string from location values")
    sp.add_argument("--lat", "--latitude", type=float, default=0.0, help="latitude (degrees)")
    sp.add_argument("--lon", "--longitude", type=float, default=0.0, help="longitude (degrees)")
    sp.add_argument("--alt", "--altitude", type=float, default=0.0, help="altitude (see --altitude-type)")
    sp.add_argument("--latunc", type=float, default=0.0, help="latitude uncertainty (degrees)")
    sp.add_argument("--lonunc", type=float, default=0.0, help="longitude uncertainty (degrees)")
    sp.add_argument("--altunc", type=float, default=0.0, help="altitude uncertainty")
    sp.add_argument("--smallest", action="store_true",
                    help="zero uncertainty means smallest representable (default: unknown)")
    sp.add_argument("--floor", type=float, default=0.0, help="floor number (1/16 resolution)")
    sp.add_argument("--height", type=float, default=0.0, help="height above floor (m)")
    sp.add_argument("--heightunc", type=float, default=0.0, help="height above floor uncertainty (m)")
    sp.add_argument("--bssid", action="append", help="colocated BSSID(s), comma separated; repeatable")
    sp.add_argument("--datum", type=int, default=int(Datum.WGS84), help="datum code (default 1, WGS84)")
    sp.add_argument("--altitude-type", type=int, default=int(AltitudeType.METERS),
                    help="altitude type code (default 1, meters)")
    sp.add_argument("--expected-to-move", type=int, choices=range(4), default=0)
    sp.add_argument("--retransmission-denied", action="store_true")
    sp.add_argument("--expiration", type=int, default=0, help="retention expiration (hours)")
    sp.add_argument("--sta-location-policy", action="store_true")
    sp.add_argument("--regloc-agreement", action="store_true")
    sp.add_argument("--regloc-dse", action="store_true")
    sp.add_argument("--dependent-sta", action="store_true")
    sp.add_argument("--no-lci", action="store_true")
    sp.add_argument("--no-z", action="store_true")
    sp.add_argument("--no-usage", action="store_true")
    sp.add_argument("--no-bssids", action="store_true")
    sp.add_argument("--zero-indicator", action="store_true",
                    help="write MaxBSSID Indicator 0 instead of the address count")
    sp.add_argument("--check", action="store_true", help="decode the result again")
    sp.set_defaults(func=cmd_encode)

    sp = sub.add_parser("sample", help="decode and encode a bundled example")
    sp.add_argument("--scenario", default="sydney", choices=sorted(SCENARIOS))
    sp.set_defaults(func=cmd_sample)

    return p


def main(argv=None):
    p = build_parser()
    ns = p.parse_args(argv)
    level = logging.WARNING if ns.verbose == 0 else logging.INFO if ns.verbose == 1 else logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)
    return ns.func(ns)


if __name__ == "__main__":
    raise SystemExit(main())
