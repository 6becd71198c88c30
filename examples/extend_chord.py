"""Example: drive the action API directly and render the result as TikZ."""

from geoconstruct import Scene, generate_tikz_document


def main() -> None:
    scene = Scene()

    # chord A-B of a circle centered at C
    scene.apply_action("line", (60, 80))
    scene.apply_action("line", (60, -80))
    # seed the center directly; no tool creates a lone point
    scene.store.add_point(0.0, 0.0)
    scene.apply_action("circle", (0, 0))
    scene.apply_action("circle", (60, 80))

    # extend the chord downwards past B
    scene.apply_action("extend", (60, 80))
    scene.apply_action("extend", (60, -80))
    outcome = scene.apply_action("extend", (60, -200))

    print(f"{outcome.state} -> {outcome.next_state}")
    for point in outcome.points:
        print(f"  new point {point.label}: ({point.x:.3f}, {point.y:.3f}) kind={point.kind}")

    print(generate_tikz_document(scene.view(), title="extended chord", normalize=True))


if __name__ == "__main__":
    main()
