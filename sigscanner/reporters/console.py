import sys
from datetime import datetime

from colorama import init as colorama_init, Fore, Style
colorama_init(autoreset=True)


class Log:
    """Colored console logger. verbose: 0 quiet, 1 normal, 2 debug."""

    def __init__(self, verbose: int = 1, stream=None):
        self.verbose = verbose
        self.stream = stream or sys.stdout

    def _time(self):
        return datetime.now().strftime("[%H:%M:%S]")

    def _fmt(self, level: str, color: str):
        return f"{self._time()} {color}[{level}]{Style.RESET_ALL}"

    def _print(self, line: str):
        print(line, file=self.stream)

    def info(self, msg: str):
        if self.verbose >= 1:
            self._print(f"{self._fmt('INFO', Fore.CYAN)} {msg}")

    def warn(self, msg: str):
        if self.verbose >= 0:
            self._print(f"{self._fmt('WARNING', Fore.YELLOW)} {msg}")

    def ok(self, msg: str):
        self._print(f"{self._fmt('SUCCESS', Fore.GREEN)} {msg}")

    def fail(self, msg: str):
        self._print(f"{self._fmt('FAIL', Fore.RED)} {msg}")

    def debug(self, msg: str):
        if self.verbose >= 2:
            self._print(f"{self._fmt('DEBUG', Fore.MAGENTA)} {msg}")

    def finding(self, sev: str, name: str, url: str, description: str, code: int):
        sev_col = {"critical": Fore.RED + Style.BRIGHT, "high": Fore.RED,
                   "medium": Fore.YELLOW, "low": Fore.GREEN}.get(sev.lower(), Fore.WHITE)
        self._print(f"{self._fmt(sev.upper(), sev_col)} {name} "
                    f"{Fore.MAGENTA}{url}{Style.RESET_ALL} {description} "
                    f"{Style.DIM}(HTTP {code}){Style.RESET_ALL}")
