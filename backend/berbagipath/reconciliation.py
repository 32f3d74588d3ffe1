"""
Payment reconciliation: applies a gateway payment status to the donation or
wallet top-up it refers to.

Donations move pending -> paid -> settled (or pending -> failed/expired).
Campaign totals are credited only on the first transition into paid/settled,
and a top-up credits the wallet only on its first transition into paid, so a
webhook delivered twice changes nothing the second time.
"""
import datetime
import logging
from dataclasses import dataclass
from typing import Optional

from .campaign_models import Campaign
from .donation_models import Donation
from .notifications import push_notification
from .user_models import User
from .utils import format_rupiah
from .wallet_models import WalletTopup

logger = logging.getLogger(__name__)

DONATION_PREFIX = 'DON-'
TOPUP_PREFIX = 'TOPUP-'

PAID_STATUSES = {'PAID', 'SETTLED', 'SUCCEEDED', 'COMPLETED', 'SUCCESS'}
FAILED_STATUSES = {'FAILED': 'failed', 'EXPIRED': 'expired'}
CREDITED = ('paid', 'settled')


@dataclass
class ReconcileResult:
    success: bool
    message: str
    kind: Optional[str] = None  # donation, topup
    record_id: Optional[str] = None
    status: Optional[str] = None
    credited: bool = False


def parse_gateway_time(value) -> Optional[datetime.datetime]:
    """'2024-05-01T10:00:00.000Z' -> naive UTC datetime; None if unparseable."""
    if not value or not isinstance(value, str):
        return None
    try:
        dt = datetime.datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return dt


def credit_campaign(db, campaign_id: str, amount: float) -> Optional[Campaign]:
    campaign = db.query(Campaign).filter(Campaign.id == campaign_id).first()
    if not campaign:
        logger.warning("Campaign %s not found while crediting %s", campaign_id, amount)
        return None
    campaign.current_amount = (campaign.current_amount or 0) + amount
    campaign.donor_count = (campaign.donor_count or 0) + 1
    return campaign


def mark_donation_paid(db, donation: Donation, settled: bool = False, payment_method: Optional[str] = None,
                       payment_channel: Optional[str] = None, paid_at: Optional[datetime.datetime] = None) -> bool:
    """Returns True when this call credited the campaign."""
    if payment_method:
        donation.payment_method = payment_method
    if payment_channel:
        donation.payment_channel = payment_channel

    if donation.status in CREDITED:
        if settled and donation.status == 'paid':
            donation.status = 'settled'
        return False

    donation.status = 'settled' if settled else 'paid'
    donation.paid_at = paid_at or datetime.datetime.utcnow()
    campaign = credit_campaign(db, donation.campaign_id, donation.amount)
    if donation.user_id:
        title = campaign.title if campaign else 'campaign'
        push_notification(db, donation.user_id, 'Donasi Berhasil',
                          f'Terima kasih! Donasi sebesar {format_rupiah(donation.amount)} untuk "{title}" telah diterima.',
                          'donation')
    return True


def mark_topup_paid(db, topup: WalletTopup, payment_method: Optional[str] = None,
                    payment_channel: Optional[str] = None) -> bool:
    """Returns True when this call credited the wallet."""
    if payment_method:
        topup.payment_method = payment_method
    if payment_channel:
        topup.payment_channel = payment_channel
    if topup.status == 'paid':
        return False

    topup.status = 'paid'
    user = db.query(User).filter(User.id == topup.user_id).first()
    if not user:
        logger.warning("User %s not found while crediting top-up %s", topup.user_id, topup.id)
        return False
    user.balance = (user.balance or 0) + topup.amount
    push_notification(db, user.id, 'Top Up Berhasil',
                      f'Saldo sebesar {format_rupiah(topup.amount)} telah ditambahkan ke Kantong Donasimu.')
    return True


def mark_failed(record, status: str) -> bool:
    """Only pending records can fail or expire."""
    if record.status != 'pending':
        return False
    record.status = status
    return True


def apply_payment_status(db, external_id: str, gateway_status: str, payment_method: Optional[str] = None,
                         payment_channel: Optional[str] = None, paid_at=None) -> ReconcileResult:
    """Match a gateway event to its record and apply the transition. Commits on success."""
    status = (gateway_status or '').strip().upper()
    if not external_id:
        return ReconcileResult(False, 'Missing external id')

    if external_id.startswith(TOPUP_PREFIX):
        kind = 'topup'
        record = db.query(WalletTopup).filter(WalletTopup.external_id == external_id).first()
    else:
        kind = 'donation'
        record = db.query(Donation).filter(Donation.external_id == external_id).first()

    if not record:
        logger.warning("No %s found for external id %s", kind, external_id)
        return ReconcileResult(False, f'{kind.capitalize()} not found', kind=kind)

    credited = False
    if status in PAID_STATUSES:
        if kind == 'donation':
            credited = mark_donation_paid(db, record, settled=(status == 'SETTLED'),
                                          payment_method=payment_method, payment_channel=payment_channel,
                                          paid_at=parse_gateway_time(paid_at))
        else:
            credited = mark_topup_paid(db, record, payment_method=payment_method,
                                       payment_channel=payment_channel)
    elif status in FAILED_STATUSES:
        mark_failed(record, FAILED_STATUSES[status])
    else:
        logger.info("Ignoring %s status %r for %s", kind, status, external_id)
        return ReconcileResult(True, f'Status {status or "?"} ignored', kind=kind,
                               record_id=record.id, status=record.status)

    db.commit()
    logger.info("%s %s is now %s (credited=%s)", kind, external_id, record.status, credited)
    return ReconcileResult(True, f'Webhook processed for {external_id}', kind=kind,
                           record_id=record.id, status=record.status, credited=credited)
