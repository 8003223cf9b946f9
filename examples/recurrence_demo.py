#!/usr/bin/env python3
"""
Walk-through of the recurrence explorer: typing into fields, recomputing,
and comparing the fixed and evolving transition matrix variants.
"""
import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from pkgs.engine_runtime import RecurrenceSession
from pkgs.inputs import ParameterSet
from pkgs.observability import INPUT_REJECTED
from pkgs.recurrence import equations, format_final_value


def demo_session():
    """Edit parameters the way a form would and recompute."""
    print("Linear Recurrence Explorer Demo")
    print("=" * 40)

    print("1. Fixed transition matrix with default parameters...")
    session = RecurrenceSession(ParameterSet.defaults())
    session.bus.subscribe(INPUT_REJECTED, lambda e: print(f"   ✗ rejected {e['field']} = {e['value']!r}"))
    traj = session.calculate()
    for line in equations(traj.variant):
        print(f"   {line}")
    print(f"   ✓ {format_final_value(traj)}")

    print("\n2. Typing '-0.25' into x0 one keystroke at a time...")
    for text in ("-", "-0", "-0.", "-0.2", "-0.25"):
        session.set_x0(text)
    session.set_x0("-0.25.")
    print(f"   ✓ {format_final_value(session.calculate())}")

    print("\n3. Switching to the evolving W variant...")
    session.replace_params(session.params.with_drift())
    traj = session.calculate()
    for line in equations(traj.variant):
        print(f"   {line}")
    print(f"   ✓ {format_final_value(traj)}")
    last = session.records()[-1]
    print(f"   W[{traj.steps}] = [[{last['w00']:.4f}, {last['w01']:.4f}], "
          f"[{last['w10']:.4f}, {last['w11']:.4f}]]")


if __name__ == "__main__":
    demo_session()
