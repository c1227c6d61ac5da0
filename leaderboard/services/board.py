"""
Board service - Assemble and format leaderboard data
"""
import html
from datetime import timedelta, timezone
from typing import Dict, List

from leaderboard.core.ranking import rank_key
from leaderboard.core.store import StoreSnapshot
from leaderboard.models import BoardRow, MetaConfig


STYLESHEET = "https://cdn.jsdelivr.net/npm/bootswatch@5.3.3/dist/darkly/bootstrap.min.css"


def board_rows(snapshot: StoreSnapshot) -> List[BoardRow]:
    """
    Rank every team's best record

    Returns:
        Rows sorted best first by the ranking rule, ranks starting at 1
    """
    ranked = sorted(snapshot.leaderboard.items(), key=lambda item: (rank_key(item[1]), item[0]))
    return [
        BoardRow(rank=idx + 1, team=team, score=record.score, time=record.time)
        for idx, (team, record) in enumerate(ranked)
    ]


def board_data(snapshot: StoreSnapshot, meta: MetaConfig, include_history: bool = True) -> Dict:
    """JSON payload for GET /"""
    data = {
        "title": page_title(meta),
        "leaderboard": [row.model_dump(mode="json") for row in board_rows(snapshot)],
    }
    if include_history:
        data["history"] = {
            team: [record.model_dump(mode="json") for record in records]
            for team, records in snapshot.history.items()
        }
    return data


def page_title(meta: MetaConfig) -> str:
    return f"{meta.title} {meta.year}" if meta.year else meta.title


def render_html(snapshot: StoreSnapshot, meta: MetaConfig) -> str:
    """Render the leaderboard as a standalone HTML page"""
    tz = timezone(timedelta(hours=meta.utc_offset))
    title = html.escape(page_title(meta))

    body = []
    for row in board_rows(snapshot):
        local = row.time.astimezone(tz).strftime("%Y-%m-%d %H:%M:%S")
        body.append(
            f"<tr><td>{row.rank}</td><td>{html.escape(row.team)}</td>"
            f"<td>{row.score}</td><td>{local}</td></tr>"
        )

    return (
        "<!doctype html><html><head>"
        f'<link href="{STYLESHEET}" rel="stylesheet">'
        '<meta charset="utf-8" />'
        '<meta name="viewport" content="width=device-width,initial-scale=1.0" />'
        f"<title>{title}</title></head><body>"
        f'<div class="container"><h1>{title}</h1><p>Refresh the page to see the latest records</p></div>'
        '<div class="container"><table class="table table-hover">'
        "<thead><tr><th>#</th><th>Team</th><th>Score</th><th>Time</th></tr></thead>"
        f"<tbody>{''.join(body)}</tbody></table></div>"
        "</body></html>"
    )
