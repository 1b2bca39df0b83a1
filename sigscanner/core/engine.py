from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Tuple

import httpx

from sigscanner.core.models import Finding, HTTPResponse
from sigscanner.signatures.model import Plugin, Signatures

VERSION = "1.0.0"
USER_AGENT = f"sigscanner/{VERSION}"


class Engine:
    """
    Fetches every plugin endpoint on a target and runs the plugin checks on
    each response.

    Usage:
        with Engine(signatures, logger=log) as engine:
            findings = engine.scan("https://example.com")
    """

    def __init__(self, signatures: Signatures, timeout: float = 10, proxy: Optional[str] = None,
                 threads: int = 10, verify: bool = False, headers: Optional[Dict[str, str]] = None,
                 logger=None, transport: Optional[httpx.BaseTransport] = None):
        self.signatures = signatures
        self.threads = max(1, threads)
        self.logger = logger
        client_headers = {"User-Agent": USER_AGENT}
        client_headers.update(headers or {})
        self.client = httpx.Client(
            verify=verify, proxy=proxy, timeout=timeout,
            headers=client_headers, transport=transport)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self.client.close()

    @staticmethod
    def _url(target: str, endpoint: str) -> str:
        return f"{target.rstrip('/')}/{endpoint.lstrip('/')}"

    def _fetch(self, url: str, follow_redirects: bool) -> Optional[HTTPResponse]:
        try:
            resp = self.client.get(url, follow_redirects=follow_redirects)
        except httpx.HTTPError as e:
            if self.logger:
                self.logger.warn(f"GET {url} failed: {e}")
            return None
        if self.logger:
            self.logger.debug(f"→ GET {url} ({resp.status_code})")
        return HTTPResponse.from_httpx(resp)

    def _run(self, plugin: Plugin, url: str) -> List[Finding]:
        resp = self._fetch(url, plugin.follow_redirects)
        if resp is None:
            return []

        results: List[Finding] = []
        for check in plugin.checks:
            if not check.match(resp):
                continue
            finding = Finding(
                url=url, check_name=check.name, severity=check.severity,
                description=check.description, remediation=check.remediation,
                status_code=resp.status_code,
            )
            results.append(finding)
            if self.logger:
                self.logger.finding(finding.severity, finding.check_name, url,
                                    finding.description, finding.status_code)
        return results

    def scan(self, target: str) -> List[Finding]:
        """Scan *target*; findings come back in plugin / endpoint / check order."""
        jobs: List[Tuple[Plugin, str]] = [
            (plugin, self._url(target, endpoint))
            for plugin in self.signatures
            for endpoint in plugin.endpoints
        ]
        if self.logger:
            self.logger.info(f"Scanning {target} ({len(jobs)} requests)")

        with ThreadPoolExecutor(max_workers=self.threads) as pool:
            futures = [pool.submit(self._run, plugin, url) for plugin, url in jobs]
            # result() re-raises match() precondition errors
            results = [f.result() for f in futures]

        findings = [finding for batch in results for finding in batch]
        if self.logger and not findings:
            self.logger.fail(f"No findings for {target}")
        return findings
