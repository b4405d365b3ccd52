import io
import unittest

from intrusion_sim.discrete_event_sim import Event
from intrusion_sim.events import (Action, DeployAttack, DeployRepair,
                                  ExecuteAttack, ExecuteRepair, NetworkEvent,
                                  Notify, action_tiebreak)
from intrusion_sim.intrusion import Config, Simulator


class EventRecordTests(unittest.TestCase):
    def test_records(self) -> None:
        self.assertEqual(DeployAttack(2, 5).record(1000), "Deploy_Attack(1000, 2, 5)")
        self.assertEqual(ExecuteAttack(2, 5).record(1100), "Execute_Attack(1100, 2, 5)")
        self.assertEqual(DeployRepair(5).record(10000), "Deploy_Repair(10000, 5)")
        self.assertEqual(ExecuteRepair(5).record(10100), "Execute_Repair(10100, 5)")
        self.assertEqual(Notify(2).record(1200), "Notify(1200, 2)")

    def test_outside_attacker_is_reported_as_minus_one(self) -> None:
        self.assertEqual(DeployAttack(None, 3).record(1000), "Deploy_Attack(1000, -1, 3)")
        self.assertEqual(ExecuteAttack(None, 3).record(1100), "Execute_Attack(1100, -1, 3)")

    def test_each_event_has_its_action(self) -> None:
        self.assertIs(DeployAttack(None, 0).action, Action.DEPLOY_ATTACK)
        self.assertIs(ExecuteAttack(None, 0).action, Action.EXECUTE_ATTACK)
        self.assertIs(DeployRepair(0).action, Action.DEPLOY_REPAIR)
        self.assertIs(ExecuteRepair(0).action, Action.EXECUTE_REPAIR)
        self.assertIs(Notify(0).action, Action.NOTIFY)

    def test_events_are_values(self) -> None:
        self.assertEqual(Notify(3), Notify(3))
        self.assertNotEqual(Notify(3), Notify(4))
        self.assertNotEqual(DeployRepair(3), ExecuteRepair(3))

    def test_tiebreak_favours_attacks_over_repairs(self) -> None:
        self.assertTrue(action_tiebreak(ExecuteAttack(0, 1), 5, DeployAttack(0, 1), 5))
        self.assertTrue(action_tiebreak(DeployAttack(0, 1), 5, ExecuteRepair(1), 5))
        self.assertTrue(action_tiebreak(ExecuteRepair(1), 5, DeployRepair(1), 5))
        self.assertTrue(action_tiebreak(DeployRepair(1), 5, Notify(1), 5))
        self.assertFalse(action_tiebreak(Notify(1), 5, Notify(2), 5))

    def test_handlers_come_from_the_concrete_events(self) -> None:
        self.assertIs(NetworkEvent.process, Event.process)
        for kind in DeployAttack, ExecuteAttack, DeployRepair, ExecuteRepair, Notify:
            self.assertIsNot(kind.process, Event.process, kind.__name__)

        class Unhandled(NetworkEvent):
            action = Action.NOTIFY

        with self.assertRaises(NotImplementedError):
            Unhandled().process(Simulator(Config(4, 50, 50, seed=1), None))


class EventValidationTests(unittest.TestCase):
    def setUp(self) -> None:
        self.sim = Simulator(Config(4, 50, 50, seed=1), io.StringIO())

    def test_out_of_range_ids_are_rejected(self) -> None:
        for event in DeployAttack(0, 4), ExecuteAttack(-1, 2), DeployRepair(7), ExecuteRepair(4), Notify(9):
            with self.assertRaises(ValueError):
                self.sim.schedule(0, event)
        self.assertTrue(self.sim.events.is_empty())

    def test_missing_source_only_allowed_for_attacks(self) -> None:
        self.sim.schedule(0, DeployAttack(None, 1))
        self.sim.schedule(0, ExecuteAttack(None, 1))
        with self.assertRaises(ValueError):
            self.sim.schedule(0, Notify(None))  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            self.sim.schedule(0, DeployAttack(0, None))  # type: ignore[arg-type]
        self.assertEqual(len(self.sim.events), 2)


if __name__ == "__main__":
    unittest.main()
