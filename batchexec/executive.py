"""The batch executive: a host object for shell-like batch processing.

BatchExec keeps all of its settings in an AttributeRegistry and wraps
sub-shell invocation, directory handling and platform detection with
consistent logging and failure handling. Failures go through cough(),
which either raises FatalError (when the `fatal` attribute is set) or logs
a warning and returns -1 so the caller can carry on.

Usage:
    bx = BatchExec(echo=1)
    bx.mkdir("out/reports")
    for line in bx.c2l("ls -1 out", strip=True):
        ...

    bx.attrs.set("fatal", 0)
    bx.attempt(bx.lov.lookup, "color", "missing")   # -> -1, warning logged
"""

import getpass
import logging
import os
import re
import shutil
import stat
import sys
import threading
import time
import weakref
from pathlib import Path
from typing import IO, Any, Callable, Iterable, Mapping

from .config import BatchExecConfig, get_config
from .core import ALL, Attributed, EnumRegistry, Kind
from .errors import BatchExecError, CallSyntaxError, FatalError
from .utils import platforms, text
from .utils.logging import trace
from .utils.shell import output_lines, output_tokens, run_capture
from .utils.tabulate import log_table

logger = logging.getLogger(__name__)

COUGH_SENTINEL = -1

FD_MAX = 2  # highest standard file descriptor (stderr)

ENV_WSL_DIST = "WSL_DISTRO_NAME"

_PERM_BITS = {
    "u": {"r": stat.S_IRUSR, "w": stat.S_IWUSR, "x": stat.S_IXUSR},
    "g": {"r": stat.S_IRGRP, "w": stat.S_IWGRP, "x": stat.S_IXGRP},
    "o": {"r": stat.S_IROTH, "w": stat.S_IWOTH, "x": stat.S_IXOTH},
}
_RE_SYMBOLIC = re.compile(r"([ugoa]*)([+\-=])([rwx]*)")


def apply_symbolic_mode(mode: int, perms: str) -> int:
    """Apply chmod-style symbolic permissions (e.g. "a+x,u-w") to a mode.

    Raises:
        CallSyntaxError: If the permission string cannot be parsed.
    """
    for clause in perms.split(","):
        match = _RE_SYMBOLIC.fullmatch(clause.strip())
        if not match:
            raise CallSyntaxError(f"invalid permission string [{perms}]")
        who, op, what = match.groups()
        classes = "ugo" if (not who or "a" in who) else who

        bits = 0
        clear = 0
        for cls in classes:
            clear |= sum(_PERM_BITS[cls].values())
            for perm in what:
                bits |= _PERM_BITS[cls][perm]

        if op == "+":
            mode |= bits
        elif op == "-":
            mode &= ~bits
        else:
            mode = (mode & ~clear) | bits
    return mode


def _flatten(value: Any) -> str:
    """One-line rendering: sequences as items, mappings sorted by key."""
    if isinstance(value, Mapping):
        items = sorted(value.items(), key=lambda kv: str(kv[0]))
        return "{" + ", ".join(f"{k!r}: {v!r}" for k, v in items) + "}"
    if isinstance(value, (set, frozenset)):
        return ", ".join(repr(v) for v in sorted(value, key=str))
    if isinstance(value, (list, tuple)):
        return ", ".join(repr(v) for v in value)
    return str(value)


class BatchExec(Attributed):
    """Batch executive host object.

    Args:
        lov: List-of-values registry to share (defaults to the process-wide one)
        log: Logger to embed (defaults to this module's logger)
        config: Defaults for the flag attributes (defaults to get_config())
        **overrides: Attribute values to apply as both value and default
    """

    _n_objects = 0
    _id_lock = threading.Lock()

    def __init__(
        self,
        lov: EnumRegistry | None = None,
        log: logging.Logger | None = None,
        config: BatchExecConfig | None = None,
        **overrides: Any,
    ):
        self._config = config or get_config()
        self._registry = lov or EnumRegistry.shared()
        self._logger = log or logger

        super().__init__(log=self._logger)

        self.attrs.sync(ALL)
        self.attrs.ro("_log", "_lov")

        for name, value in overrides.items():
            if value is None:
                raise CallSyntaxError(f"BatchExec({name}=...) value not specified")
            self.log.debug("attribute [%s] override [%s]", name, value)
            self.attrs.set(name, value, value)

        windows = self.on_windows()
        self.attrs.set(
            "cmd_os_version",
            platforms.CMD_OS_VERSION_WIN32 if windows else platforms.CMD_OS_VERSION_UX,
        )
        self.attrs.set("cmd_os_where", "where" if windows else "which")

        self._id: int | None = None
        self._release = weakref.finalize(self, BatchExec._drop_object)
        self.object_id("add")

    def _define_attributes(self) -> None:
        cfg = self._config
        program = Path(sys.argv[0]) if sys.argv and sys.argv[0] else Path("batchexec")

        define = self.attrs.define
        define("_log", Kind.HANDLE, self._logger)
        define("_lov", Kind.HANDLE, self._registry)
        define("autoheader", Kind.BOOLEAN, cfg.autoheader, cfg.autoheader)
        define("cmd_os_version", Kind.ANY)
        define("cmd_os_where", Kind.ANY)
        define("dn_start", Kind.ANY, Path.cwd())
        define("echo", Kind.BOOLEAN, cfg.echo, cfg.echo)
        define("fatal", Kind.BOOLEAN, cfg.fatal, cfg.fatal)
        define("leader", Kind.ANY, cfg.leader)
        define("maxlen", Kind.ANY, cfg.maxlen)
        define("prefix", Kind.ANY, program.name.split(".")[0])
        define("pn_issue", Kind.ANY, platforms.PN_OS_ISSUE)
        define("pn_release", Kind.ANY, platforms.PN_OS_RELEASE)
        define("pn_version", Kind.ANY, platforms.PN_OS_VERSION)
        define("re_whitespace", Kind.ANY, text.RE_WHITESPACE)
        define("stdfd", Kind.ANY, FD_MAX)
        define("this", Kind.ANY, program.name)
        define("wsl_active", Kind.BOOLEAN, 0, 0)
        define("wsl_env", Kind.ANY, os.environ.get(ENV_WSL_DIST))

    # ── Handles ──

    @property
    def log(self) -> logging.Logger:
        return self.attrs.get("_log")

    @property
    def lov(self) -> EnumRegistry:
        return self.attrs.get("_lov")

    def _echo(self) -> bool:
        return bool(self.attrs.get("echo"))

    def attributes(self, verbose: bool = False) -> list[str]:
        """Public attribute names, optionally tabulated to the log."""
        have = self.attrs.names(verbose=verbose)
        if self._echo():
            self.log.info("am [%s] have [%s]", type(self).__name__, ", ".join(have))
        return have

    # ── Object ids ──

    @classmethod
    def n_objects(cls) -> int:
        """Number of live host objects."""
        with cls._id_lock:
            return cls._n_objects

    @classmethod
    def _drop_object(cls) -> None:
        with cls._id_lock:
            cls._n_objects -= 1

    def object_id(self, op: str | None = None) -> int | None:
        """Current object id; "add" assigns the next one, "del" releases it.

        An id is the live-object count at the time it was added, so ids can
        repeat once objects are released. A released object keeps its id.
        Garbage collection releases an object that was never released
        explicitly; releasing twice has no further effect.
        """
        if op == "add":
            with BatchExec._id_lock:
                BatchExec._n_objects += 1
                self._id = BatchExec._n_objects
        elif op == "del":
            self._release()
        elif op is not None:
            raise CallSyntaxError(f"invalid operator [{op}]")

        trace(self.log, "id [%s]", self._id)
        return self._id

    # ── Failure policy ──

    def cough(self, message: str, cause: BaseException | None = None) -> int:
        """Escalate or degrade a failure according to the `fatal` attribute.

        Returns:
            COUGH_SENTINEL (-1) in non-fatal mode.

        Raises:
            FatalError: In fatal mode.
        """
        if self.attrs.get("fatal"):
            self.log.critical("FATAL %s", message)
            raise FatalError(message) from cause

        self.log.warning("WARNING %s", message)
        return COUGH_SENTINEL

    def attempt(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Call `func`, routing any BatchExecError through cough()."""
        try:
            return func(*args, **kwargs)
        except FatalError:
            raise
        except BatchExecError as exc:
            return self.cough(str(exc), cause=exc)

    # ── Commands ──

    def c2l(self, cmd: str, strip: bool = False) -> list[str] | int:
        """Run `cmd` and return its output lines (blank lines dropped if `strip`)."""
        if cmd is None:
            raise CallSyntaxError("c2l(CMD) requires a command")
        if self._echo():
            self.log.info("executing [%s]", cmd)

        output = run_capture(cmd)
        if not output:
            return self.cough("command returned no output")

        raw = len(output.splitlines())
        if self._echo():
            self.log.info("command returned %d lines", raw)

        lines = output_lines(output, strip_blank=strip)
        self.log.debug("output [%s]", lines)
        if len(lines) < raw and self._echo():
            self.log.info("stripped %d lines", raw - len(lines))
        return lines

    def c2t(self, cmd: str) -> list[str] | int:
        """Run `cmd` and return its output as whitespace-delimited tokens."""
        if cmd is None:
            raise CallSyntaxError("c2t(CMD) requires a command")
        if self._echo():
            self.log.info("executing [%s]", cmd)

        output = run_capture(cmd)
        if not output:
            return self.cough("command returned no output")

        tokens = output_tokens(output)
        if tokens and self._echo():
            self.log.info("command returned %d tokens", len(tokens))
        self.log.debug("output [%s]", tokens)
        return tokens

    # ── Text ──

    def crlf(self, value: str) -> str:
        if value is None:
            raise CallSyntaxError("crlf(EXPR) requires a string")
        stripped = text.crlf(value)
        if stripped != value:
            trace(self.log, "string truncated [%s]", stripped)
        return stripped

    def trim(self, value: str, pattern: str) -> str:
        if value is None or pattern is None:
            raise CallSyntaxError("trim(EXPR, REGEXP) requires a string and a pattern")
        return text.trim(value, pattern)

    def trim_ws(self, value: str) -> str:
        return self.trim(value, self.attrs.get("re_whitespace"))

    def trunc(self, value: str, max_len: int | None = None) -> str:
        if value is None:
            raise CallSyntaxError("trunc(EXPR) requires a string")
        return text.trunc(value, self.attrs.get("maxlen") if max_len is None else max_len)

    # ── Filesystem ──

    def extant(self, pn: str | Path, type: str = "d") -> bool:
        """Check that a path exists as a directory ("d"), file ("f") or anything ("e")."""
        if pn is None:
            raise CallSyntaxError("extant(PATH) requires a path")
        path = Path(pn)
        if type == "d":
            found = path.is_dir()
        elif type == "f":
            found = path.is_file()
        elif type == "e":
            found = path.exists()
        else:
            self.cough(f"invalid type [{type}]")
            return False

        if found:
            return True
        self.cough(f"does not exist [{pn}]")
        return False

    def is_rx(self, pn: str | Path, type: str = "d") -> bool:
        if pn is None:
            raise CallSyntaxError("is_rx(PATH) requires a path")
        return (
            self.extant(pn, type)
            and os.access(pn, os.R_OK)
            and os.access(pn, os.X_OK)
        )

    def is_rwx(self, pn: str | Path, type: str = "d") -> bool:
        return self.is_rx(pn, type) and os.access(pn, os.W_OK)

    def ckdir(self, dn: str | Path) -> int:
        if dn is None:
            raise CallSyntaxError("ckdir(DIR) requires a directory")
        if self.is_rx(dn):
            return 0
        return self.cough(f"directory [{dn}] not accessible")

    def mkdir(self, dn: str | Path) -> int:
        """Create a directory (and parents) unless it already exists."""
        if dn is None:
            raise CallSyntaxError("mkdir(DIR) requires a directory")
        path = Path(dn)
        if path.is_dir():
            return 0

        self.log.info("creating directory [%s]", dn)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            return self.cough(f"mkdir({dn}) failed: {exc}", cause=exc)

        if not path.is_dir():
            return self.cough(f"could not create directory [{dn}]")
        return 0

    def rmdir(self, dn: str | Path) -> int:
        """Remove a directory tree."""
        if dn is None:
            raise CallSyntaxError("rmdir(DIR) requires a directory")
        path = Path(dn)
        if not path.is_dir():
            return self.cough(f"directory does not exist [{dn}]")

        if self._echo():
            self.log.info("pruning directory [%s]", dn)
        try:
            shutil.rmtree(path)
        except OSError as exc:
            return self.cough(f"rmtree({dn}) failed: {exc}", cause=exc)

        if path.is_dir():
            return self.cough(f"could not prune directory [{dn}]")
        return 0

    def delete(self, *pns: str | Path) -> int:
        """Delete files and directories; returns 0 or the cough sentinel."""
        if not pns:
            raise CallSyntaxError("delete(PATH, ...) requires at least one path")

        fail = 0
        for pn in pns:
            path = Path(pn)
            if path.is_dir():
                if self.rmdir(path):
                    fail += 1
            elif path.is_file():
                if self._echo():
                    self.log.info("removing file [%s]", pn)
                try:
                    path.unlink()
                except OSError as exc:
                    self.log.debug("unlink(%s) failed: %s", pn, exc)
                if path.is_file():
                    self.cough(f"could not remove file [{pn}]")
                    fail += 1

        if fail:
            return self.cough(f"{fail} files could not be removed")
        return 0

    def pwd(self) -> Path:
        cwd = Path.cwd()
        self.log.info("now in directory [%s]", cwd)
        return cwd

    def godir(self, dn: str | Path | None = None) -> int:
        """Change to `dn` (the starting directory by default)."""
        if dn is None:
            dn = self.attrs.get("dn_start")
        if not self.is_rx(dn):
            return self.cough(f"invalid directory [{dn}]")
        try:
            os.chdir(dn)
        except OSError as exc:
            return self.cough(f"chdir({dn}) failed: {exc}", cause=exc)
        self.pwd()
        return 0

    def chmod(self, perms: str | int, *pns: str | Path) -> int:
        """Apply permissions to each path; returns how many were changed.

        `perms` is an octal mode or a symbolic string such as "a+x".
        """
        if not pns:
            raise CallSyntaxError("chmod(PERMS, PATH, ...) requires at least one path")

        missing: list[str] = []
        failed: list[str] = []
        count = 0
        for pn in pns:
            path = Path(pn)
            if not path.exists():
                missing.append(str(pn))
                continue
            try:
                if isinstance(perms, int):
                    mode = perms
                else:
                    mode = apply_symbolic_mode(stat.S_IMODE(path.stat().st_mode), perms)
                path.chmod(mode)
                count += 1
            except OSError:
                failed.append(str(pn))

        if missing:
            self.log.warning("pathname(s) do not exist: %s", ", ".join(missing))
        if failed:
            self.log.warning(
                "chmod(%s) failed on the following path(s): %s", perms, ", ".join(failed)
            )
        return count

    def mkexec(self, *pns: str | Path) -> int:
        return self.chmod("a+x", *pns)

    def mkro(self, *pns: str | Path) -> int:
        return self.chmod("a-w", *pns)

    def mkwrite(self, *pns: str | Path) -> int:
        return self.chmod("u+w", *pns)

    # ── Platform ──

    def on_linux(self) -> bool:
        return platforms.on_linux()

    def on_windows(self) -> bool:
        return platforms.on_windows()

    def on_cygwin(self) -> bool:
        return platforms.on_cygwin()

    def like_unix(self) -> bool:
        return platforms.like_unix()

    def on_wsl(self) -> bool:
        """True when running inside Windows Subsystem for Linux."""
        if not self.on_linux():
            return False
        if self.attrs.get("wsl_env"):
            return True

        found = platforms.kernel_mentions_microsoft(
            Path(self.attrs.get("pn_release")), Path(self.attrs.get("pn_version"))
        )
        if found is None:
            self.cough(f"unable to determine platform [{sys.platform}]")
            return False
        return found

    def like_windows(self) -> bool:
        return self.on_windows() or self.on_cygwin() or self.on_wsl()

    def os_version(self) -> list[str]:
        """Best-effort OS version lines (WSL-aware, non-fatal)."""
        wsl_env = self.attrs.get("wsl_env")
        if wsl_env:
            self.log.info("retrieving WSL distro from environment")
            lines = [wsl_env]
        else:
            if self.on_wsl():
                cmd = f"cat {self.attrs.get('pn_issue')}"
            else:
                cmd = self.attrs.get("cmd_os_version")
            result = self.c2l(cmd, strip=True)
            lines = result if isinstance(result, list) else []

        if not lines:
            lines = [""]
        elif self.on_windows():
            lines = lines[1:] or [""]
        trace(self.log, "lines [%s]", lines)
        return lines

    def powershell(self, pn: str | Path | None = None) -> str:
        """Command string that launches PowerShell (optionally on a script file)."""
        windows = self.like_windows()
        cmd = "powershell.exe" if windows else "pwsh"
        if pn is None:
            parms = "-Command"
        else:
            parms = ("-ExecutionPolicy ByPass " if windows else "") + f"-File {pn}"
        cmd = f"{cmd} {parms}"
        self.log.debug("cmd [%s]", cmd)
        return cmd

    def where(self, exe: str) -> list[str] | int:
        """Locate an executable on the search path."""
        if exe is None:
            raise CallSyntaxError("where(EXPR) requires an executable name")
        return self.c2l(f"{self.attrs.get('cmd_os_where')} {exe}", strip=True)

    def whoami(self) -> str | None:
        user = self.winuser() if self.on_windows() else getpass.getuser()
        self.log.debug("whoami [%s]", user)
        return user

    def winuser(self) -> str | None:
        """Current Windows user via PowerShell, or None off Windows."""
        if not self.like_windows():
            return None
        cmd = f"{self.powershell()} '$env:UserName'"
        result = self.c2l(cmd)
        if isinstance(result, list) and result:
            return result[0]
        self.log.warning("[%s] produced no result", cmd)
        return None

    def wsl_dist(self) -> str | None:
        """Name of the WSL distribution, if one can be determined."""
        if not self.like_windows():
            self.log.warning("WSL not applicable to this platform")
            return None

        if self.on_wsl():
            dist = self.os_version()
            self.attrs.set("wsl_active", 1)
            if dist[0]:
                return dist[0]

        tokens = self.c2t("wsl --status")
        if isinstance(tokens, list) and len(tokens) > 2:
            if tokens[:2] == ["Default", "Distribution:"]:
                if self._echo():
                    self.log.info("WSL distro is [%s]", tokens[2])
                self.attrs.set("wsl_active", 1)
                return tokens[2]
            if tokens[0] == "Copyright" and tokens[7:8] == ["Usage:"]:
                if self._echo():
                    self.log.info("WSL available but no distribution")
            elif tokens[1] == "Invalid" and tokens[6:7] == ["Invalid"]:
                if self._echo():
                    self.log.info("trying alternative WSL method")
                listing = self.c2t("wslconfig /l")
                if (
                    isinstance(listing, list)
                    and listing[2:3] == ["Subsystem"]
                    and listing[6:7] == ["(Default)"]
                ):
                    self.attrs.set("wsl_active", 1)
                    return listing[5]

        if self._echo():
            self.log.info("WSL distribution unable to be determined")
        return None

    # ── Output files ──

    def dump(self, thing: Any, *args: Any) -> str:
        """Flatten a value onto one line for logging.

        `thing` may name an attribute of this object, be a %-style format
        string (the remaining arguments are its values), a plain scalar, a
        sequence, a mapping or any other object. Except for format strings,
        the remaining arguments are a description prefixed to the result.
        """
        desc = " ".join(str(a) for a in args) + " " if args else ""

        if isinstance(thing, str) and self.attrs.has(thing):
            value = self.attrs.get(thing)
            trace(self.log, "thing [%s] value [%s]", thing, value)
            return f"{desc}attribute {thing} [{_flatten(value)}]"

        trace(self.log, "thing [%s] type [%s]", thing, type(thing).__name__)
        if isinstance(thing, str):
            if "%" in thing and args:
                return thing % args
            return f"{desc}scalar [{thing}]"
        if thing is None or isinstance(thing, (int, float, Path)):
            return f"{desc}scalar [{thing}]"
        if isinstance(thing, Mapping):
            return f"{desc}hash {_flatten(thing)}"
        if isinstance(thing, (list, tuple, set, frozenset)):
            return f"{desc}array [{_flatten(thing)}]"
        return f"{desc}{type(thing).__name__} {thing!r}"

    def header(self, fh: IO[str]) -> bool:
        """Write a generated-by header to `fh` when `autoheader` is set."""
        if fh is None:
            raise CallSyntaxError("header(FILEHANDLE) requires a file handle")
        if not self.attrs.get("autoheader"):
            if self._echo():
                self.log.info("skipping automatic header")
            return False

        leader = self.attrs.get("leader")
        fh.write(f"{leader} ---- automatically generated by {self.attrs.get('this')} ----\n")
        fh.write(f"{leader} ---- timestamp {time.ctime()} ---- \n")
        return True

    def is_stdio(self, fh: IO) -> int:
        """1 if `fh` is stdin/stdout/stderr, 0 if not, -1 if it has no descriptor."""
        if fh is None:
            raise CallSyntaxError("is_stdio(FILEHANDLE) requires a file handle")
        try:
            fno = fh.fileno()
        except (AttributeError, OSError, ValueError):
            return -1
        trace(self.log, "fileno [%d]", fno)
        return 0 if fno > self.attrs.get("stdfd") else 1

    def tabulate(
        self,
        records: Iterable[Mapping[str, Any]] | Mapping[Any, Mapping[str, Any]],
        sort: str = "name",
    ) -> int:
        """Log a table of flat records (a list, or the values of a mapping)."""
        if records is None:
            raise CallSyntaxError("tabulate(REF) requires records")
        if isinstance(records, Mapping):
            records = records.values()
        return log_table(self.log, records, sort=sort, max_len=self.attrs.get("maxlen"))
