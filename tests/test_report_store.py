import random
from datetime import date, datetime, timedelta

from database.models import BadgeType, HealthReportCreate, ScanRequest
from services.report_store import ReportStore
from services.wellness import WellnessService

JAN_1 = datetime(2024, 1, 1, 8, 0)


def report_payload(**overrides) -> HealthReportCreate:
    fields = dict(
        wellness_score=82,
        heart_rate=72,
        oxygen_level=98,
        blood_sugar=96,
        stress_level="Low",
        energy_level="High",
        detected_mood="happy",
        mood_confidence=91,
    )
    fields.update(overrides)
    return HealthReportCreate(**fields)


async def test_create_report_clamps_and_normalizes(db, user_id):
    store = ReportStore(db)
    report = await store.create_health_report(
        user_id=user_id,
        wellness_score=140,
        heart_rate=20,
        oxygen_level=120,
        blood_sugar=10,
        stress_level="high",
        energy_level="sleepy",
        detected_mood="EXCITED",
        mood_confidence=150,
    )

    assert report.wellness_score == 100
    assert report.heart_rate == 50
    assert report.oxygen_level == 100
    assert report.blood_sugar == 60
    assert report.stress_level == "High"
    assert report.energy_level == "Normal"
    assert report.detected_mood == "neutral"
    assert report.mood_confidence == 100


async def test_history_is_newest_first_and_limited(db, user_id):
    store = ReportStore(db)
    for offset in (2, 0, 1):
        await store.create_health_report(
            user_id=user_id,
            created_at=JAN_1 + timedelta(days=offset),
            **report_payload(wellness_score=60 + offset).model_dump()
        )

    reports = await store.get_user_health_reports(user_id, limit=2)
    assert [r.wellness_score for r in reports] == [62, 61]

    latest = await store.get_latest_health_report(user_id)
    assert latest.created_at == JAN_1 + timedelta(days=2)
    assert await store.count_user_health_reports(user_id) == 3


async def test_report_dates_are_distinct(db, user_id):
    store = ReportStore(db)
    for hour in (8, 20):
        await store.create_health_report(
            user_id=user_id,
            created_at=datetime(2024, 1, 5, hour, 0),
            **report_payload().model_dump()
        )
    await store.create_health_report(
        user_id=user_id,
        created_at=datetime(2024, 1, 4, 9, 0),
        **report_payload().model_dump()
    )

    assert await store.get_user_report_dates(user_id) == [date(2024, 1, 5), date(2024, 1, 4)]


async def test_face_image_is_encrypted_at_rest(db, user_id):
    store = ReportStore(db)
    image = "data:image/jpeg;base64,/9j/4AAQSkZJRg=="
    report = await store.create_health_report(
        user_id=user_id,
        face_image_data=image,
        **report_payload().model_dump(exclude={"face_image_data"})
    )

    cursor = await db.execute(
        "SELECT face_image_encrypted, face_image_type FROM health_reports WHERE id = ?",
        (report.id,)
    )
    stored, media_type = await cursor.fetchone()
    assert media_type == "image/jpeg"
    assert b"/9j/4AAQSkZJRg" not in stored
    assert b"\xff\xd8\xff" not in stored

    detail = await store.get_health_report(report.id)
    assert detail.face_image_data == image


async def test_award_badge_is_idempotent(db, user_id):
    store = ReportStore(db)

    assert await store.award_badge(user_id, BadgeType.HEALTH_BEGINNER) is True
    assert await store.award_badge(user_id, BadgeType.HEALTH_BEGINNER) is False

    badges = await store.get_user_badges(user_id)
    assert [b.badge_type for b in badges] == [BadgeType.HEALTH_BEGINNER]


async def test_first_scan_awards_health_beginner(db, user_id):
    service = WellnessService(db, rng=random.Random(8))

    result = await service.create_report_from_scan(
        user_id, ScanRequest(mood="Happy", confidence=0.93)
    )

    assert result.new_badges == [BadgeType.HEALTH_BEGINNER]
    assert result.report.detected_mood == "happy"
    assert result.report.mood_confidence == 93
    assert result.report.stress_level == "Low"

    second = await service.create_report_from_scan(
        user_id, ScanRequest(mood="sad", confidence=55)
    )
    assert second.new_badges == []


async def test_week_of_reports_awards_consistency_pro_once(db, user_id):
    service = WellnessService(db)

    awarded = []
    for offset in range(8):
        result = await service.submit_report(
            user_id, report_payload(), created_at=JAN_1 + timedelta(days=offset)
        )
        awarded.extend(result.new_badges)

    assert awarded.count(BadgeType.CONSISTENCY_PRO) == 1
    assert awarded.count(BadgeType.HEALTH_BEGINNER) == 1


async def test_thirty_high_scores_award_wellness_master(db, user_id):
    service = WellnessService(db)

    result = None
    for offset in range(30):
        result = await service.submit_report(
            user_id,
            report_payload(wellness_score=81),
            created_at=JAN_1 + timedelta(days=offset, hours=offset % 3)
        )

    assert BadgeType.WELLNESS_MASTER in result.new_badges
    held = await service.store.get_user_badge_types(user_id)
    assert held == {
        BadgeType.HEALTH_BEGINNER,
        BadgeType.CONSISTENCY_PRO,
        BadgeType.WELLNESS_MASTER,
    }


async def test_thirty_reports_at_80_do_not_award_wellness_master(db, user_id):
    service = WellnessService(db)

    for offset in range(30):
        await service.submit_report(
            user_id,
            report_payload(wellness_score=80),
            created_at=JAN_1 + timedelta(days=offset * 2)
        )

    held = await service.store.get_user_badge_types(user_id)
    assert held == {BadgeType.HEALTH_BEGINNER}


async def test_short_history_window_still_awards_wellness_master(db, user_id):
    service = WellnessService(db, history_window=10)

    for offset in range(30):
        await service.submit_report(
            user_id,
            report_payload(wellness_score=95),
            created_at=JAN_1 + timedelta(days=offset)
        )

    held = await service.store.get_user_badge_types(user_id)
    assert BadgeType.WELLNESS_MASTER in held
    assert BadgeType.CONSISTENCY_PRO in held


async def test_reports_since_are_oldest_first_and_bounded_by_date(db, user_id):
    store = ReportStore(db)
    now = datetime.now()
    for days_ago in (10, 1, 3, 0):
        await store.create_health_report(
            user_id=user_id,
            created_at=now - timedelta(days=days_ago),
            **report_payload(wellness_score=70 + days_ago).model_dump()
        )

    reports = await store.get_user_health_reports_since(user_id, now - timedelta(days=7))
    assert [r.wellness_score for r in reports] == [73, 71, 70]
