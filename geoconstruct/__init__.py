from .ast import Action, Script, Span
from .config import ConstructionConfig, get_construction_config, set_construction_config
from .dedup import circle_exists, find_nearby_point, line_exists, point_exists
from .errors import ConstructionError, DanglingReferenceError, SelectionError, UnknownToolError
from .geometry import Circle, Line, Point, circle_circle, segment_circle, segment_segment
from .labels import LabelCursor, format_label, next_label, parse_label, reset_cursor
from .parser import parse_script
from .printer import print_scene, summarize_scene
from .scene import Scene, run_script
from .store import GeometryStore, SceneBatch, SceneView
from .tikz_codegen import generate_tikz_code, generate_tikz_document
from .tools import TOOLS, ActionOutcome, ToolController, ToolState

__all__ = [
    'Action',
    'ActionOutcome',
    'Circle',
    'ConstructionConfig',
    'ConstructionError',
    'DanglingReferenceError',
    'GeometryStore',
    'LabelCursor',
    'Line',
    'Point',
    'Scene',
    'SceneBatch',
    'SceneView',
    'Script',
    'SelectionError',
    'Span',
    'TOOLS',
    'ToolController',
    'ToolState',
    'UnknownToolError',
    'circle_circle',
    'circle_exists',
    'find_nearby_point',
    'format_label',
    'generate_tikz_code',
    'generate_tikz_document',
    'get_construction_config',
    'line_exists',
    'next_label',
    'parse_label',
    'parse_script',
    'point_exists',
    'print_scene',
    'reset_cursor',
    'run_script',
    'segment_circle',
    'segment_segment',
    'set_construction_config',
    'summarize_scene',
]
