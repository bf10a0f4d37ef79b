"""
Input/Output Manager (HDF5)
Handles saving and loading the control-point graph to .h5 files, and the
JSON form of the derived paths used for clipboard transfer.
"""
import json
import logging
from dataclasses import replace
from importlib.metadata import version, PackageNotFoundError
from typing import Optional

import h5py
import numpy as np

from curveeditor.config import EditorCurveConfig
from curveeditor.model import PathDecodeError
from curveeditor.model.curve_path import CurvePath
from curveeditor.model.graph import ControlPointGraph

# Get module logger
logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("curveeditor")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"


def _handle_positions(graph: ControlPointGraph, attribute: str) -> np.ndarray:
    """(N, 2) positions of one handle kind per anchor, NaN where the anchor has none."""
    rows = []
    for anchor in graph.anchors:
        handle = getattr(anchor, attribute)
        if handle is None:
            rows.append([np.nan, np.nan])
        else:
            control = graph.control(handle)
            rows.append([control.x, control.y])
    return np.array(rows, dtype=np.float64).reshape(-1, 2)


class IOManager:

    @staticmethod
    def save_project(graph: ControlPointGraph, filepath: str) -> None:
        logger.info(f"Saving project to: {filepath}")
        try:
            with h5py.File(filepath, "w") as f:
                f.attrs["version"] = APP_VERSION
                f.attrs["canvas_width"] = graph.width
                f.attrs["canvas_height"] = graph.height
                f.attrs["use_strength_handler"] = graph.config.use_strength_handler
                f.attrs["controls_visible"] = graph.controls_visible

                # --- 1. SAVE GRAPH ---
                grp_graph = f.create_group("graph")
                grp_graph.create_dataset("anchors", data=graph.anchor_positions())
                grp_graph.create_dataset("prev_controls", data=_handle_positions(graph, "prev_control"))
                grp_graph.create_dataset("next_controls", data=_handle_positions(graph, "next_control"))
                grp_graph.create_dataset("strength_controls", data=_handle_positions(graph, "strength_control"))

                # --- 2. SAVE DERIVED PATHS ---
                # Stored for consumers that only need playback; the graph is the source on load.
                grp_paths = f.create_group("paths")
                grp_paths.create_dataset("x", data=np.array(graph.path_x.serialize(), dtype=np.float64))
                grp_paths.create_dataset("y", data=np.array(graph.path_y.serialize(), dtype=np.float64))

            logger.info(f"Project saved to: {filepath}")

        except Exception as e:
            logger.exception(f"Failed to save project: {e}")
            raise e

    @staticmethod
    def load_project(filepath: str, config: Optional[EditorCurveConfig] = None) -> ControlPointGraph:
        """
        Rebuild a graph from a project file.

        The editor switches come from `config`; only `use_strength_handler`
        is taken from the file, since it decides which handles exist.
        """
        logger.info(f"Loading project from: {filepath}")
        if not h5py.is_hdf5(filepath):
            msg = f"File '{filepath}' is not a valid HDF5 file."
            logger.error(msg)
            raise ValueError(msg)

        try:
            with h5py.File(filepath, "r") as f:
                if "version" in f.attrs:
                    logger.debug(f"Project written by version {f.attrs['version']}")

                config = EditorCurveConfig() if config is None else config
                config = replace(
                    config,
                    use_strength_handler=bool(f.attrs.get("use_strength_handler", config.use_strength_handler)),
                )

                graph = ControlPointGraph(
                    float(f.attrs["canvas_width"]),
                    float(f.attrs["canvas_height"]),
                    config,
                )

                grp_graph = f["graph"]
                anchors = np.asarray(grp_graph["anchors"][()])
                prev_controls = np.asarray(grp_graph["prev_controls"][()])
                next_controls = np.asarray(grp_graph["next_controls"][()])
                strength_controls = np.asarray(grp_graph["strength_controls"][()])
                controls_visible = bool(f.attrs.get("controls_visible", True))

            for (x, y), prev_xy, next_xy, strength_xy in zip(anchors, prev_controls, next_controls, strength_controls):
                handle = graph.add_anchor(
                    is_first=bool(np.isnan(prev_xy).any()),
                    is_last=bool(np.isnan(next_xy).any()),
                    x=float(x),
                    y=float(y),
                )
                anchor = graph.anchor(handle)
                for control_handle, xy in (
                    (anchor.prev_control, prev_xy),
                    (anchor.next_control, next_xy),
                    (anchor.strength_control, strength_xy),
                ):
                    if control_handle is not None and not np.isnan(xy).any():
                        graph.place(control_handle, float(xy[0]), float(xy[1]))
                graph.update_strength_bounds(handle)

            if not controls_visible:
                graph.toggle_controls()
            graph.rebuild()

            logger.info(f"Project loaded: {len(graph.anchors)} anchors.")
            return graph

        except Exception as e:
            logger.exception(f"Failed to load project: {e}")
            raise e

    @staticmethod
    def paths_to_json(graph: ControlPointGraph) -> str:
        """Both derived paths as a JSON object in the flat wire format."""
        return json.dumps({
            "version": APP_VERSION,
            "x": graph.path_x.serialize(),
            "y": graph.path_y.serialize(),
        })

    @staticmethod
    def paths_from_json(text: str) -> tuple[CurvePath, CurvePath]:
        """
        Decode the JSON produced by `paths_to_json`.

        Raises:
            PathDecodeError: The JSON is malformed or a path record is invalid.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise PathDecodeError(f"Invalid path JSON: {e.msg}", offset=e.pos) from e
        if not isinstance(data, dict) or "x" not in data or "y" not in data:
            raise PathDecodeError("Path JSON must be an object with 'x' and 'y' lists.", offset=0)
        for key in ("x", "y"):
            if not isinstance(data[key], list):
                raise PathDecodeError(f"Path '{key}' must be a list, got {type(data[key]).__name__}.", offset=0)

        return CurvePath.deserialize(data["x"]), CurvePath.deserialize(data["y"])
