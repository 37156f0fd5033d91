import unittest
from datetime import datetime, timedelta, timezone

from screenhound.db import InMemoryDbClient
from screenhound.moderation import (
    InvalidTransition,
    SubmissionNotFound,
    kind_for_route,
    list_approved,
    list_pending,
    moderate,
    target_status,
    transition,
)
from screenhound.submissions import (
    DogPhoto,
    SubmissionStatus,
    SubmissionType,
    TriviaSubmission,
)

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TransitionTests(unittest.TestCase):
    def test_action_maps_to_status(self):
        self.assertEqual(target_status("approve"), SubmissionStatus.APPROVED)
        self.assertEqual(target_status("reject"), SubmissionStatus.REJECTED)

    def test_unknown_or_missing_action_rejects(self):
        self.assertEqual(target_status("maybe"), SubmissionStatus.REJECTED)
        self.assertEqual(target_status(None), SubmissionStatus.REJECTED)

    def test_route_type_selects_kind(self):
        self.assertEqual(kind_for_route("photo"), SubmissionType.DOG_PHOTO)
        self.assertEqual(kind_for_route("trivia"), SubmissionType.TRIVIA)
        self.assertEqual(kind_for_route("anything"), SubmissionType.TRIVIA)

    def test_override_allowed_by_default(self):
        self.assertEqual(
            transition(SubmissionStatus.APPROVED, "reject"),
            SubmissionStatus.REJECTED,
        )

    def test_strict_mode_refuses_terminal_states(self):
        self.assertEqual(
            transition(SubmissionStatus.PENDING, "approve", allow_override=False),
            SubmissionStatus.APPROVED,
        )
        with self.assertRaises(InvalidTransition):
            transition(SubmissionStatus.REJECTED, "approve", allow_override=False)


class ModerateTests(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryDbClient()

    def test_approve_then_reject(self):
        photo = self.db.insert_submission(DogPhoto(phone_number="+1", dog_name="Max"))
        self.assertEqual(photo.status, SubmissionStatus.PENDING)

        updated = moderate(self.db, SubmissionType.DOG_PHOTO, photo.id, "approve")
        self.assertEqual(len(updated), 1)
        self.assertEqual(updated[0].status, SubmissionStatus.APPROVED)

        updated = moderate(self.db, SubmissionType.DOG_PHOTO, photo.id, "reject")
        self.assertEqual(updated[0].status, SubmissionStatus.REJECTED)
        self.assertEqual(
            self.db.get_submission(SubmissionType.DOG_PHOTO, photo.id).status,
            SubmissionStatus.REJECTED,
        )

    def test_unknown_id_updates_nothing(self):
        self.assertEqual(
            moderate(self.db, SubmissionType.TRIVIA, "missing", "approve"), []
        )

    def test_strict_mode(self):
        trivia = self.db.insert_submission(
            TriviaSubmission(phone_number="+1", trivia_text="fact")
        )
        moderate(self.db, SubmissionType.TRIVIA, trivia.id, "approve", allow_override=False)
        with self.assertRaises(InvalidTransition):
            moderate(
                self.db, SubmissionType.TRIVIA, trivia.id, "reject", allow_override=False
            )
        with self.assertRaises(SubmissionNotFound):
            moderate(
                self.db, SubmissionType.TRIVIA, "missing", "reject", allow_override=False
            )

    def test_kind_selects_table(self):
        trivia = self.db.insert_submission(
            TriviaSubmission(phone_number="+1", trivia_text="fact")
        )
        self.assertEqual(
            moderate(self.db, SubmissionType.DOG_PHOTO, trivia.id, "approve"), []
        )


class ListingTests(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryDbClient()

    def _photo(self, minutes: int, status=SubmissionStatus.PENDING) -> DogPhoto:
        return self.db.insert_submission(
            DogPhoto(
                phone_number="+1",
                dog_name=f"dog-{minutes}",
                status=status,
                created_at=BASE_TIME + timedelta(minutes=minutes),
            )
        )

    def _trivia(self, minutes: int, status=SubmissionStatus.PENDING) -> TriviaSubmission:
        return self.db.insert_submission(
            TriviaSubmission(
                phone_number="+1",
                trivia_text=f"fact-{minutes}",
                status=status,
                created_at=BASE_TIME + timedelta(minutes=minutes),
            )
        )

    def test_pending_is_oldest_first(self):
        for minutes in (5, 1, 3):
            self._photo(minutes)
            self._trivia(minutes)
        self._photo(0, status=SubmissionStatus.APPROVED)

        photos, trivia = list_pending(self.db)
        self.assertEqual([p.dog_name for p in photos], ["dog-1", "dog-3", "dog-5"])
        self.assertEqual(
            [t.trivia_text for t in trivia], ["fact-1", "fact-3", "fact-5"]
        )

    def test_approved_is_newest_first_and_bounded(self):
        for minutes in range(25):
            self._photo(minutes, status=SubmissionStatus.APPROVED)
            self._trivia(minutes, status=SubmissionStatus.APPROVED)
        self._photo(100, status=SubmissionStatus.REJECTED)

        photos, trivia = list_approved(self.db)
        self.assertEqual(len(photos), 20)
        self.assertEqual(len(trivia), 10)
        self.assertEqual(photos[0].dog_name, "dog-24")
        self.assertEqual(photos[-1].dog_name, "dog-5")
        self.assertEqual(trivia[0].trivia_text, "fact-24")
        self.assertEqual(trivia[-1].trivia_text, "fact-15")


if __name__ == "__main__":
    unittest.main()
