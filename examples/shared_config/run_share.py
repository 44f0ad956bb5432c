"""
Save a configuration to JSON, share it as a URL and restore it in a new session.
"""

import sys
import tempfile
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from chaoslab import InvalidConfiguration, SimulationSession
from chaoslab.io import (
    config_from_session,
    config_from_url,
    load_session,
    load_shared,
    save_session,
    share_url,
)


def main() -> None:
    session = SimulationSession("rossler")
    session.set_parameters({"c": 9.0})
    session.run(500)

    with tempfile.TemporaryDirectory() as tmp:
        path = save_session(session, tmp)
        print(f"Saved {path.name}")
        restored = SimulationSession()
        load_session(restored, path)
        print(f"Restored {restored.system.name}: state {restored.get_state()}")

    url = share_url("https://example.org/chaoslab/", config_from_session(session))
    print(f"Share URL: {url}")
    other = SimulationSession("doublePendulum")
    load_shared(other, url.split("config=", 1)[1])
    assert other.get_parameters() == config_from_url(url)["parameters"]
    print(f"Loaded from URL: {other.system.name} {other.get_parameters()}")

    try:
        load_shared(other, "definitely-not-a-config")
    except InvalidConfiguration as exc:
        print(f"Rejected token: {exc.to_dict()}")


if __name__ == "__main__":
    main()
