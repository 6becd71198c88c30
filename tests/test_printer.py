from geoconstruct.printer import print_scene, summarize_scene
from geoconstruct.scene import Scene


def _crossing_scene():
    scene = Scene()
    for coord in [(100, 100), (300, 100), (200, 50), (200, 150)]:
        scene.apply_action("line", coord)
    return scene


def test_print_scene_lists_points_then_primitives():
    scene = _crossing_scene()

    assert print_scene(scene.view()) == (
        "point A (100, 100)\n"
        "point B (300, 100)\n"
        "point C (200, 50)\n"
        "point D (200, 150)\n"
        "point E (200, 100) [kind=line-line]\n"
        "line A-B\n"
        "line C-D\n"
    )


def test_print_scene_includes_circles_and_selection():
    scene = Scene(tool="circle")
    scene.store.add_point(0.0, 0.0)
    scene.store.add_point(30.0, 40.0)
    scene.click(0, 0)
    scene.click(30, 40)
    scene.click(30, 40)

    out = print_scene(scene.view())

    assert "circle center A through B [radius=50]\n" in out
    assert out.endswith("selection B\n")
    assert "selection" not in print_scene(scene.view(), include_selection=False)


def test_summarize_scene_counts_intersections():
    assert summarize_scene(_crossing_scene().view()) == (
        "5 point(s) (1 intersection(s)), 2 line(s), 0 circle(s)"
    )
