import logging
import subprocess
from typing import List, Optional, Sequence

from .. import constants
from ..errors import AptosCliError

logger = logging.getLogger(__name__)

# Conventional shell status for "command not found"
COMMAND_NOT_FOUND = 127


class AptosCli:
    """
    Thin wrapper around the ``aptos`` binary.

    Commands are passed as argv lists (never through a shell) so addresses,
    hashes and ids reach the CLI exactly as the operator typed them.
    """

    def __init__(self, executable: str = constants.APTOS_CLI):
        self.executable = executable

    def is_installed(self) -> bool:
        try:
            subprocess.run(
                [self.executable, "--version"],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=True,
            )
        except (OSError, subprocess.CalledProcessError):
            return False
        return True

    def build_publish_payload(
        self,
        output_path: str,
        named_addresses: dict,
        package_dir: Optional[str] = None,
    ) -> None:
        """Compile the Move package into a publish payload JSON file at output_path."""
        cmd = [
            self.executable, "move", "build-publish-payload",
            "--json-output-file", output_path,
            "--named-addresses", ",".join(f"{name}={address}" for name, address in named_addresses.items()),
            "--assume-yes",
        ]
        if package_dir:
            cmd += ["--package-dir", package_dir]

        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise AptosCliError(f"could not run {self.executable}: {e}", COMMAND_NOT_FOUND) from e
        if result.returncode != 0:
            detail = (result.stderr or result.stdout or "").strip()
            raise AptosCliError(
                f"{self.executable} exited with status {result.returncode}" + (f": {detail}" if detail else ""),
                result.returncode,
            )

    @staticmethod
    def run_function_command(executable: str, profile: str, function_id: str, args: Sequence[str]) -> List[str]:
        cmd = [executable, "move", "run", "--profile", profile, "--function-id", function_id]
        if args:
            cmd += ["--args", *args]
        return cmd

    def run_function(self, profile: str, function_id: str, args: Sequence[str]) -> int:
        """
        Invoke an entry function with ``aptos move run``.

        The CLI inherits stdin/stdout/stderr (it may prompt for confirmation)
        and its exit status is returned unchanged.
        """
        cmd = self.run_function_command(self.executable, profile, function_id, args)
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            return subprocess.run(cmd).returncode
        except OSError as e:
            raise AptosCliError(f"could not run {self.executable}: {e}", COMMAND_NOT_FOUND) from e
