import logging
from typing import Optional

from app.core.config import settings
from app.core.metrics import notifications_failed_total, notifications_sent_total
from app.models.team import Team
from app.models.user import User
from app.services.notifications.email_provider import EmailProvider
from app.services.notifications.templates import get_team_member_added_template

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, email_provider: Optional[EmailProvider] = None):
        self.email_provider = email_provider or EmailProvider()

    async def notify_team_member_added(
        self, user: User, team: Team, invited_by: Optional[str] = None
    ) -> bool:
        """
        Tell a user they were added to a team.

        Returns True if the email went out. Never raises for delivery problems;
        the provider logs and reports them as False.
        """
        inviter = invited_by or "a team owner"
        subject = f"You've been added to team: {team.name}"
        message = (
            f"Hello,\n\nYou have been added to the team \"{team.name}\" by {inviter}.\n\n"
            f"You can now collaborate with your team members on {settings.PROJECT_NAME}.\n\n"
            f"Best regards,\n{settings.PROJECT_NAME} Team"
        )
        html_message = get_team_member_added_template(
            team_name=team.name,
            invited_by=inviter,
            board_link=settings.FRONTEND_BASE_URL,
            project_name=settings.PROJECT_NAME,
        )

        sent = await self.email_provider.send(user.email, subject, message, html_message)
        if sent:
            notifications_sent_total.labels(type="email").inc()
        else:
            notifications_failed_total.labels(type="email").inc()
        return sent


notification_service = NotificationService()
