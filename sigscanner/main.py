import argparse
import sys
from typing import Dict, List, Optional

from sigscanner.core.engine import Engine
from sigscanner.core.errors import SignatureError
from sigscanner.reporters.console import Log
from sigscanner.reporters.table import print_signatures
from sigscanner.signatures.loader import load_signatures


def _parse_headers(raw: List[str]) -> Dict[str, str]:
    headers = {}
    for h in raw:
        if ":" not in h:
            raise argparse.ArgumentTypeError(f"invalid header {h!r}, expected 'Name: value'")
        k, v = h.split(":", 1)
        headers[k.strip()] = v.strip()
    return headers


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Signature-based HTTP endpoint scanner")
    p.add_argument("-s", "--signatures", required=True, help="YAML signatures file")
    p.add_argument("-u", "--url", action="append", default=[],
                   help="Target base URL (repeatable)")
    p.add_argument("--list", metavar="SEVERITY",
                   help="List the checks with this severity and exit")
    p.add_argument("--threads", type=int, default=10, help="Concurrent requests")
    p.add_argument("--timeout", type=float, default=10, help="HTTP timeout in seconds")
    p.add_argument("--proxy", help="Proxy (ex: http://127.0.0.1:8080)")
    p.add_argument("--verify-ssl", action="store_true", help="Verify TLS certificates")
    p.add_argument("-H", "--header", action="append", default=[],
                   help="Extra request header 'Name: value' (repeatable)")
    p.add_argument("-v", "--verbose", action="count", default=1,
                   help="-v, -vv")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    if not args.list and not args.url:
        p.error("one of --url or --list is required")
    try:
        headers = _parse_headers(args.header)
    except argparse.ArgumentTypeError as e:
        p.error(str(e))

    log = Log(verbose=args.verbose)

    try:
        sign = load_signatures(args.signatures)
    except (SignatureError, OSError) as e:
        log.fail(f"Could not load {args.signatures}: {e}")
        return 2
    log.debug(f"{len(sign)} plugins loaded from {args.signatures}")

    if args.list:
        print_signatures(sign, args.list)
        return 0

    findings = []
    try:
        with Engine(sign, timeout=args.timeout, proxy=args.proxy, threads=args.threads,
                    verify=args.verify_ssl, headers=headers, logger=log) as engine:
            for url in args.url:
                findings.extend(engine.scan(url))
    except SignatureError as e:
        log.fail(f"Scan aborted: {e}")
        return 2

    if findings:
        log.ok(f"{len(findings)} finding(s)")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
