from __future__ import annotations

import argparse
from pathlib import Path

from agentproto.relay.app import serve


def main(argv: list[str] | None = None, *, runner=serve) -> None:
    p = argparse.ArgumentParser(description="agentproto command relay API")
    p.add_argument("--config", default=None, type=Path, help="Path to relay_config.json")
    p.add_argument("--agent-uuid", default=None, help="Agent UUID when no config file is given")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", default=8000, type=int)
    args = p.parse_args(argv)

    runner(config_path=args.config, agent_uuid=args.agent_uuid, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
