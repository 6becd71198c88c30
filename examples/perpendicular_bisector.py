"""Example: replay a compass-and-straightedge script and print the scene."""

from geoconstruct import parse_script, print_scene, run_script, summarize_scene

TEXT = """
# Perpendicular bisector of A-B
tool line
click 0 0
click 200 0

# Circles around each endpoint through the other one
tool circle
click A
click B
click B
click A

# Joining the circle intersections bisects A-B at E
tool line
click C
click D
"""


def main() -> None:
    script = parse_script(TEXT)
    print(f"Parsed {len(script.actions)} action(s), {len(script.clicks)} click(s)")

    scene = run_script(script)
    view = scene.view()
    print(f"Scene: {summarize_scene(view)}")
    print(print_scene(view), end="")

    midpoint = view.point_by_label("E")
    print(f"\nMidpoint E: ({midpoint.x:.6f}, {midpoint.y:.6f})")


if __name__ == "__main__":
    main()
