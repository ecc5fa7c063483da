import os
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader, select_autoescape

# Setup Jinja2 environment
current_dir = os.path.dirname(os.path.abspath(__file__))
template_dir = os.path.join(current_dir, "../../templates/email")
env = Environment(
    loader=FileSystemLoader(template_dir),
    autoescape=select_autoescape(["html"]),
)


def render_template(template_name: str, context: Dict[str, Any]) -> str:
    template = env.get_template(template_name)
    return template.render(**context)


def get_team_member_added_template(
    team_name: str, invited_by: str, board_link: str, project_name: str = "Taskboard"
) -> str:
    return render_template("team_member_added.html", {
        "team_name": team_name,
        "invited_by": invited_by,
        "link": board_link,
        "project_name": project_name,
    })
