"""Report Aggregation — pure impact-report computation over already-loaded rows.

Invariants:
    - No IO, no DB: callers load artists/applications, this module shapes them
    - byStatus always lists all five application statuses, in ApplicationStatus order
    - byDiscipline keeps first-seen order of the filtered artists
    - fundingByMonth only counts accepted applications that have a submission date,
      sorted ascending by YYYY-MM
    - Missing discipline counts as "other", missing status as "draft",
      missing funding as 0

Design Decisions:
    - Labels are French: the organisation's staff read the reports in French
    - Calendar-month arithmetic clamps the day (Mar 31 - 1 month = Feb 28/29)
"""

import calendar
import csv
import io
from datetime import date, datetime, timezone

from artist_crm.core.domain_types import (
    ApplicationStatus, ArtisticDiscipline, ReportTimeRange,
)
from artist_crm.core.repository_protocols import ApplicationLike, ArtistLike

DISCIPLINE_LABELS: dict[str, str] = {
    ArtisticDiscipline.VISUAL_ARTS.value: "Arts visuels",
    ArtisticDiscipline.MUSIC.value: "Musique",
    ArtisticDiscipline.THEATER.value: "Théâtre",
    ArtisticDiscipline.DANCE.value: "Danse",
    ArtisticDiscipline.LITERATURE.value: "Littérature",
    ArtisticDiscipline.CINEMA.value: "Cinéma",
    ArtisticDiscipline.DIGITAL_ARTS.value: "Arts numériques",
    ArtisticDiscipline.MULTIDISCIPLINARY.value: "Multidisciplinaire",
    ArtisticDiscipline.OTHER.value: "Autre",
}

STATUS_LABELS: dict[str, str] = {
    ApplicationStatus.DRAFT.value: "Brouillon",
    ApplicationStatus.IN_PROGRESS.value: "En cours",
    ApplicationStatus.SUBMITTED.value: "Soumise",
    ApplicationStatus.ACCEPTED.value: "Acceptée",
    ApplicationStatus.REJECTED.value: "Refusée",
}

MONTH_ABBREVIATIONS = (
    "Jan", "Fév", "Mar", "Avr", "Mai", "Jun",
    "Jul", "Aoû", "Sep", "Oct", "Nov", "Déc",
)

TIME_RANGE_LABELS: dict[str, str] = {
    ReportTimeRange.MONTH.value: "Ce mois",
    ReportTimeRange.QUARTER.value: "Ce trimestre",
    ReportTimeRange.YEAR.value: "Cette année",
}

_MONTHS_BACK = {
    ReportTimeRange.MONTH.value: 1,
    ReportTimeRange.QUARTER.value: 3,
    ReportTimeRange.YEAR.value: 12,
}


def translate_discipline(discipline: str) -> str:
    return DISCIPLINE_LABELS.get(discipline, discipline)


def translate_status(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def format_month(month_key: str) -> str:
    """'2025-02' -> 'Fév 2025'."""
    year, month = month_key.split("-")
    return f"{MONTH_ABBREVIATIONS[int(month) - 1]} {year}"


def subtract_months(moment: datetime, months: int) -> datetime:
    """Move back whole calendar months, clamping the day to the target month.

    Clamping is deliberate: 31 March minus one month is the last day of
    February, never an overflow into early March, so a 1-month window always
    starts inside the previous calendar month.
    """
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def time_range_cutoff(time_range: str | None, now: datetime) -> datetime | None:
    """Earliest submission date included for a time range; None means unbounded."""
    months = _MONTHS_BACK.get(time_range or "")
    if months is None:
        return None
    return subtract_months(now, months)


def is_discipline_filter(discipline: str | None) -> bool:
    return bool(discipline) and discipline != "all"


def filter_artists(
    artists: list[ArtistLike], discipline: str | None,
) -> list[ArtistLike]:
    if not is_discipline_filter(discipline):
        return list(artists)
    return [a for a in artists if a.discipline == discipline]


def filter_applications(
    applications: list[ApplicationLike],
    artist_ids: set | None,
    cutoff: datetime | None,
) -> list[ApplicationLike]:
    """Keep applications of the given artists submitted on/after cutoff.

    artist_ids None means no artist restriction. With a cutoff, applications
    lacking a submission date are dropped.
    """
    kept = []
    for app in applications:
        if artist_ids is not None and app.artist_id not in artist_ids:
            continue
        if cutoff is not None:
            if app.submitted_date is None:
                continue
            if _naive(app.submitted_date) < _naive(cutoff):
                continue
        kept.append(app)
    return kept


def count_by_discipline(artists: list[ArtistLike]) -> list[dict]:
    counts: dict[str, int] = {}
    for artist in artists:
        key = artist.discipline or ArtisticDiscipline.OTHER.value
        counts[key] = counts.get(key, 0) + 1
    return [
        {"discipline": translate_discipline(key), "key": key, "count": count}
        for key, count in counts.items()
    ]


def count_by_status(applications: list[ApplicationLike]) -> list[dict]:
    counts = {status.value: 0 for status in ApplicationStatus}
    for app in applications:
        key = app.status or ApplicationStatus.DRAFT.value
        counts[key] = counts.get(key, 0) + 1
    return [
        {"status": translate_status(key), "key": key, "count": count}
        for key, count in counts.items()
    ]


def funding_by_month(applications: list[ApplicationLike]) -> list[dict]:
    totals: dict[str, int] = {}
    for app in applications:
        if app.status != ApplicationStatus.ACCEPTED.value or not app.submitted_date:
            continue
        key = f"{app.submitted_date.year}-{app.submitted_date.month:02d}"
        totals[key] = totals.get(key, 0) + (app.funding_amount or 0)
    return [
        {"month": format_month(key), "key": key, "amount": totals[key]}
        for key in sorted(totals)
    ]


def build_report(
    artists: list[ArtistLike],
    applications: list[ApplicationLike],
    time_range: str | None,
    discipline: str | None,
    now: datetime,
) -> dict:
    """Compute the impact report. Pure, no IO."""
    filtered_artists = filter_artists(artists, discipline)
    artist_ids = (
        {a.id for a in filtered_artists}
        if is_discipline_filter(discipline) else None
    )
    filtered_apps = filter_applications(
        applications, artist_ids, time_range_cutoff(time_range, now),
    )
    accepted = [
        a for a in filtered_apps
        if a.status == ApplicationStatus.ACCEPTED.value
    ]
    return {
        "totalArtists": len(filtered_artists),
        "totalApplications": len(filtered_apps),
        "acceptedApplications": len(accepted),
        "totalFunding": sum(a.funding_amount or 0 for a in accepted),
        "byDiscipline": count_by_discipline(filtered_artists),
        "byStatus": count_by_status(filtered_apps),
        "fundingByMonth": funding_by_month(filtered_apps),
    }


def report_to_csv(
    report: dict,
    time_range: str | None,
    discipline: str | None,
    generated_on: date,
) -> str:
    """Render the report as the BOM-prefixed CSV export staff open in spreadsheets."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([f"Rapport d'Impact - {generated_on.strftime('%d/%m/%Y')}"])
    writer.writerow([f"Période: {TIME_RANGE_LABELS.get(time_range or '', 'Tout')}"])
    discipline_label = (
        translate_discipline(discipline)
        if is_discipline_filter(discipline) else "Toutes"
    )
    writer.writerow([f"Discipline: {discipline_label}"])

    writer.writerow([])
    writer.writerow(["Métriques Globales"])
    writer.writerow(["Total Artistes", report["totalArtists"]])
    writer.writerow(["Total Candidatures", report["totalApplications"]])
    writer.writerow(["Candidatures Acceptées", report["acceptedApplications"]])
    writer.writerow(["Financement Total", f"{report['totalFunding']}€"])

    writer.writerow([])
    writer.writerow(["Artistes par Discipline"])
    writer.writerow(["Discipline", "Nombre"])
    for row in report["byDiscipline"]:
        writer.writerow([row["discipline"], row["count"]])

    writer.writerow([])
    writer.writerow(["Candidatures par Statut"])
    writer.writerow(["Statut", "Nombre"])
    for row in report["byStatus"]:
        writer.writerow([row["status"], row["count"]])

    writer.writerow([])
    writer.writerow(["Financement par Mois"])
    writer.writerow(["Mois", "Montant (€)"])
    for row in report["fundingByMonth"]:
        writer.writerow([row["month"], row["amount"]])

    return "\ufeff" + buffer.getvalue()


def _naive(moment: datetime) -> datetime:
    # SQLite hands back naive UTC datetimes; Postgres hands back aware ones
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)
