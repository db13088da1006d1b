from flask import jsonify, request

from . import bp
from ..errors import NotFound
from ..extensions import db
from ..model.types import is_uuid
from ..services.notification_service import NotificationInbox, NotificationService
from ..utils.decorators import current_profile, profile_required
from ..utils.net import parse_bool, parse_opt_count


def _inbox(**query) -> NotificationInbox:
    return NotificationInbox(NotificationService(db.session), current_profile().id, **query)


def _owned(inbox: NotificationInbox, note_id):
    # someone else's notification is reported exactly like a missing one
    note = inbox.service.get(note_id) if is_uuid(note_id) else None
    if note is None or note.recipient_id != inbox.recipient_id:
        raise NotFound("Notification not found")
    return note.id


@bp.get("")
@profile_required
def list_notifications():
    args = request.args
    inbox = _inbox(
        limit=parse_opt_count(args.get("limit")),
        offset=parse_opt_count(args.get("offset")),
        unread_only=parse_bool(args.get("unread_only")),
        category=(args.get("category") or "").strip() or None,
    )
    return jsonify(inbox.refresh().as_api())


@bp.put("/<note_id>/read")
@profile_required
def mark_as_read(note_id):
    inbox = _inbox()
    return jsonify(inbox.mark_as_read(_owned(inbox, note_id)).as_api())


@bp.put("/read-all")
@profile_required
def mark_all_as_read():
    return jsonify(_inbox().mark_all_as_read().as_api())


@bp.delete("/<note_id>")
@profile_required
def delete_notification(note_id):
    inbox = _inbox()
    return jsonify(inbox.delete(_owned(inbox, note_id)).as_api())
