"""
Email notifications for staff and customers
"""
from email.utils import formataddr
from flask import current_app
from flask_mail import Message, Mail
from utils.constants import APP_NAME
from utils.helpers import get_condition_name


def _mail_configured():
    return bool(current_app.config.get('MAIL_SERVER'))


def _format_price(value):
    return f"${value:,.2f}" if value is not None else 'n/a'


def notify_admins_new_ticket(ticket):
    """
    Send email notification to every admin about a newly submitted ticket.

    Args:
        ticket: The Ticket object that was just created

    Returns:
        int: Number of recipients emailed
    """
    admin_emails = current_app.config.get('ADMIN_EMAILS', [])

    if not admin_emails:
        print("[NOTIFICATION] No admins to notify")
        return 0

    if not _mail_configured():
        print("[NOTIFICATION] Email not configured - skipping notification")
        print(f"[NOTIFICATION] Would notify {len(admin_emails)} admins about ticket {ticket.id}")
        return 0

    base_url = current_app.config.get('BASE_URL', 'http://localhost:5000')
    customer = (ticket.user.name or ticket.user.email) if ticket.user else ticket.user_id
    mail = Mail(current_app)

    try:
        msg = Message(
            subject=f"New {ticket.type} ticket: {ticket.skin_name} ({ticket.condition_name})",
            recipients=list(admin_emails),
            sender=current_app.config.get('MAIL_DEFAULT_SENDER')
        )

        msg.body = f"""Hi team,

A new ticket is waiting for review:

Ticket ID: {ticket.id}
Type: {ticket.type}
Skin: {ticket.skin_name}
Condition: {get_condition_name(ticket.condition)}
Customer: {customer}
Notes: {ticket.notes or '-'}

Review it in the admin dashboard:
{base_url}/admin

{APP_NAME}
"""

        mail.send(msg)
        print(f"[NOTIFICATION] Sent notification to {len(admin_emails)} admins about ticket {ticket.id}")
        return len(admin_emails)

    except Exception as e:
        print(f"[NOTIFICATION] Failed to send notification: {e}")
        return 0


def notify_user_quote_sent(ticket):
    """Tell the ticket owner that a price quote is waiting for them."""
    user = ticket.user
    if not user or not user.email:
        print(f"[NOTIFICATION] Ticket {ticket.id} has no owner email")
        return 0

    if not _mail_configured():
        print("[NOTIFICATION] Email not configured - skipping quote notification")
        print(f"[NOTIFICATION] Would send quote {_format_price(ticket.quoted_price)} for ticket {ticket.id} to {user.email}")
        return 0

    base_url = current_app.config.get('BASE_URL', 'http://localhost:5000')
    mail = Mail(current_app)

    try:
        msg = Message(
            subject=f"Your quote for {ticket.skin_name} is ready",
            recipients=[formataddr((user.name or '', user.email))],
            sender=current_app.config.get('MAIL_DEFAULT_SENDER')
        )

        msg.body = f"""Hi {user.name or 'there'},

We reviewed your {ticket.type} request for {ticket.skin_name} ({ticket.condition_name}).

Quoted price: {_format_price(ticket.quoted_price)}
{('Note from our team: ' + ticket.admin_notes) if ticket.admin_notes else ''}

Accept or decline the quote on your tickets page:
{base_url}/tickets

{APP_NAME}
"""

        mail.send(msg)
        print(f"[NOTIFICATION] Sent quote for ticket {ticket.id} to {user.email}")
        return 1

    except Exception as e:
        print(f"[NOTIFICATION] Failed to send quote notification: {e}")
        return 0
