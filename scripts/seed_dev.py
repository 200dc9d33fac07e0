from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import sessionmaker
from spazapicks.db.engine import make_engine
from spazapicks.models import Base, Entry, Match, User
from spazapicks.week import current_week_id
from spazapicks.workflows import record_match_scores, weekly_leaderboard

FIXTURES = [
    ("Kaizer Chiefs", "Orlando Pirates", 2, 1),
    ("Mamelodi Sundowns", "SuperSport United", 0, 0),
    ("Stellenbosch", "Cape Town City", 1, 3),
    ("AmaZulu", "Golden Arrows", 2, 2),
    ("Sekhukhune United", "TS Galaxy", None, None),
]

PLAYERS = [
    ("+27 82 555 0101", "Thandi", "THANDI", ["H", "D", "A", "D", "H"]),
    ("+27 82 555 0102", "Sipho", "SIPHO", ["H", "H", "A", "A", "D"]),
    ("+27 82 555 0103", "Lerato", "LERATO", ["A", "H", "H", "H", "A"]),
]


def main() -> None:
    """Seed the development database with one demo week."""
    engine = make_engine()

    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine)

    week_id = current_week_id()
    kickoff = datetime.now(timezone.utc).replace(hour=15, minute=0, second=0, microsecond=0)

    with Session.begin() as session:
        matches = []
        for offset, (home, away, _, _) in enumerate(FIXTURES):
            match = Match(
                week_id=week_id,
                home_team=home,
                away_team=away,
                kickoff_at=kickoff + timedelta(hours=2 * offset),
            )
            matches.append(match)
        session.add_all(matches)
        session.flush()

        for index, (wa_number, first_name, alias, picks) in enumerate(PLAYERS):
            user = User(wa_number=wa_number, state="ACTIVE", first_name=first_name)
            session.add(user)
            user.assign_leaderboard_id(session, alias)

            entry = Entry(
                wa_number=wa_number,
                week_id=week_id,
                link_token=f"dev-token-{index:02d}",
            )
            for match, pick in zip(matches, picks):
                entry.add_pick(match, pick)
            session.add(entry)
        session.flush()

        summary = record_match_scores(
            session,
            [(match.id, home, away) for match, (_, _, home, away) in zip(matches, FIXTURES)],
        )
        print(f"Seeded week {week_id}: {summary.to_json()}")
        for row in weekly_leaderboard(session, week_id):
            print(f"  {row.leaderboard_id}: {row.total_points} pts ({row.entry_count} entries)")


if __name__ == "__main__":
    main()
