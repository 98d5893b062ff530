import csv
import os
import logging
from dataclasses import dataclass
from datetime import date, datetime

logger = logging.getLogger(__name__)

DATE_FORMAT = '%Y-%m-%d'
WEEKDAYS = ('Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun')


@dataclass(frozen=True)
class AttendanceRecord:
    identity: str
    date: str
    weekday: str

    def to_row(self):
        return [self.identity, self.date, self.weekday]


@dataclass(frozen=True)
class AlreadyMarked:
    identity: str


def format_date(day):
    return day.strftime(DATE_FORMAT)


def weekday_label(day):
    return WEEKDAYS[day.weekday()]


def parse_row(row):
    """Parse a ledger row, or None if it is malformed. Dates are normalized to zero-padded ISO."""
    if len(row) < 3:
        return None

    # identity is kept verbatim so it compares equal to what commit() wrote
    identity = row[0]
    if not identity:
        return None

    try:
        day = datetime.strptime(row[1].strip(), DATE_FORMAT).date()
    except ValueError:
        return None

    return AttendanceRecord(identity, format_date(day), row[2].strip() or weekday_label(day))


class AttendanceLogger:
    """Append-only CSV ledger with an in-memory set of today's identities"""

    def __init__(self, log_file='attendance.csv', today=None):
        self.log_file = log_file
        self._today = today or date.today()
        self._today_str = format_date(self._today)
        self.marked_today = set()

        for record in self.records():
            if record.date == self._today_str:
                self.marked_today.add(record.identity)

        logger.info(f"{len(self.marked_today)} already marked for {self._today_str}")

    @property
    def today(self):
        return self._today_str

    def records(self):
        """
        Read every well-formed row

        Each line is decoded and parsed on its own, so a bad line (broken
        quoting, invalid UTF-8) is skipped without affecting its neighbours.
        """
        if not os.path.exists(self.log_file):
            return []

        records = []
        with open(self.log_file, 'rb') as f:
            for line_no, raw in enumerate(f, 1):
                try:
                    line = raw.decode('utf-8').rstrip('\r\n')
                except UnicodeDecodeError:
                    logger.warning(f"Skipping undecodable line {line_no} in {self.log_file}")
                    continue
                if not line:
                    continue

                try:
                    row = next(csv.reader([line]), [])
                except csv.Error:
                    row = []

                record = parse_row(row)
                if record is None:
                    logger.debug(f"Skipping malformed line {line_no} in {self.log_file}")
                    continue
                records.append(record)
        return records

    def already_marked_today(self, identity):
        return identity in self.marked_today

    def today_identities(self):
        return sorted(self.marked_today)

    def commit(self, identity):
        """
        Mark attendance for today

        The row is appended and flushed before the in-memory set changes,
        so a failed write leaves the identity unmarked.

        Returns:
            AttendanceRecord on success, AlreadyMarked if already recorded today

        Raises:
            ValueError: for an empty identity, which could not be read back
        """
        if not identity:
            raise ValueError("Identity must not be empty")
        if identity in self.marked_today:
            return AlreadyMarked(identity)

        record = AttendanceRecord(identity, self._today_str, weekday_label(self._today))

        log_dir = os.path.dirname(self.log_file)
        try:
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            with open(self.log_file, 'a', newline='', encoding='utf-8') as f:
                writer = csv.writer(f, lineterminator='\n')
                writer.writerow(record.to_row())
                f.flush()
        except OSError as e:
            logger.error(f"Could not write attendance for {identity}: {e}")
            raise

        self.marked_today.add(identity)
        logger.info(f"Successfully marked: {identity} | {record.date} ({record.weekday})")
        return record
