import logging
import sys

import typer

from ifnamectl.commands import apply, generate, probe, topology
from ifnamectl.logging import setup_logging

app = typer.Typer(help="Generate and apply OpenShift MachineConfigs that rename network interfaces using systemd .link files.")

# Add all commands
app.command("generate")(generate.generate_cmd)
app.command("apply")(apply.apply_cmd)
app.command("topology")(topology.topology_cmd)
app.command("probe")(probe.probe_cmd)

# Global options callback
@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
):
    """ifnamectl - interface renaming via MachineConfig."""
    setup_logging(debug)
    if debug:
        logging.debug("Debug mode enabled")


def run():
    try:
        app()
    except Exception as e:
        logging.error(f"Error: {e}", exc_info=logging.getLogger().isEnabledFor(logging.DEBUG))
        sys.exit(1)


if __name__ == "__main__":
    run()
