# tests/integration/helpers.py
import json

import requests

from tests.utils.boards import MINI


# ---------- HTTP helpers (show server error bodies) ----------
def _post(url: str, payload: dict | None = None, *, timeout=5) -> dict:
    r = requests.post(url, json=payload, timeout=timeout)
    if r.status_code >= 400:
        try:
            body = r.json()
        except ValueError:
            body = r.text
        raise requests.HTTPError(
            f"{r.status_code} {r.reason} for {url}\n"
            f"Payload:\n{json.dumps(payload, indent=2)}\n"
            f"Response:\n{body}",
            response=r,
        )
    return r.json()


def _get(url: str, *, timeout=5) -> dict:
    r = requests.get(url, timeout=timeout)
    r.raise_for_status()
    return r.json()


def _create_game(base_url: str, scenario=None, rules: dict | None = None) -> dict:
    body: dict = {}
    if scenario is not None:
        body["scenario"] = scenario
    if rules is not None:
        body["rules"] = rules
    return _post(f"{base_url}/games", body)


def _create_mini(base_url: str, rules: dict | None = None) -> dict:
    return _create_game(base_url, MINI.model_dump(mode="json"), rules)


def _move(base_url: str, gid: str, src, dst) -> requests.Response:
    return requests.post(
        f"{base_url}/games/{gid}/move",
        json={"src": list(src), "dst": list(dst)},
        timeout=5,
    )
