"""Tool: browser.launch

Starts a browser executable for one URL and returns at once.

Side Effects: launches_process

Only the browser's start arguments are split like a command line. The URL
is always passed through untouched as the last argv entry, so quotes,
backslashes and spaces in it reach the browser as-is.

Fire-and-forget: the process is not waited on, its exit status is never
collected and a failed spawn is not retried. Failures come back as an
error result, not an exception.
"""

import logging
import os
import shlex
import subprocess
from typing import Dict, Any, List

import psutil

from switcher.tools.base import Tool


def split_arguments(arguments: str) -> List[str]:
    """Split a start-arguments string into argv entries.

    Windows paths keep their backslashes (non-POSIX splitting there).
    """
    if os.name == "nt":
        return [part.strip('"') for part in shlex.split(arguments, posix=False)]
    return shlex.split(arguments)


class LaunchBrowser(Tool):
    """Launch a browser executable"""

    @property
    def name(self) -> str:
        return "browser.launch"

    @property
    def schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "path": {
                    "type": "string",
                    "description": "Path to the browser executable"
                },
                "start_arguments": {
                    "type": "string",
                    "description": "Browser flags placed before the URL, e.g. '--new-window'"
                },
                "url": {
                    "type": "string",
                    "description": "URL to open, passed verbatim as the last argument"
                }
            },
            "required": ["path", "url"]
        }

    def execute(self, args: Dict[str, Any]) -> Dict[str, Any]:
        """Execute launch"""
        if not self.validate_args(args):
            return {"status": "error", "error": "Invalid arguments"}

        executable = args["path"]
        start_arguments = args.get("start_arguments", "")
        url = args["url"]

        try:
            flags = split_arguments(start_arguments)
        except ValueError as e:
            return {
                "status": "error",
                "error": f"Cannot parse start arguments '{start_arguments}': {e}"
            }

        full_cmd = [executable] + flags + [url]

        try:
            proc = subprocess.Popen(full_cmd, shell=False)
        except FileNotFoundError:
            logging.error(f"Browser executable not found: {executable}")
            return {
                "status": "error",
                "error": f"Executable not found: {executable}"
            }
        except OSError as e:
            logging.error(f"Browser launch failed: {e}")
            return {
                "status": "error",
                "error": f"Launch failed: {e}"
            }

        pid = proc.pid
        result = {"status": "success", "pid": pid, "command": full_cmd}

        # Informational only; the browser may already have handed off and exited
        try:
            result["process_name"] = psutil.Process(pid).name()
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            pass

        logging.info(f"Launched {executable} (pid {pid}) with {flags} for {url}")
        return result
