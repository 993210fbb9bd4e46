# -*- coding: utf-8 -*-
"""
Detection Data Models - Particle detections as sparse vector output.

``Detection`` wraps one detected particle: a shapely geometry in pixel
space plus a property dictionary keyed by data-dictionary names.
``Detection.from_region`` builds one from a ``Region2D`` and the image it
was found in. ``DetectionSet`` is the ordered output of one detector run,
exportable as a GeoJSON-style FeatureCollection.

Pixel space: shapely ``(x, y)`` is ``(col, row)`` with the origin at the
top-left corner of the image. A particle's geometry is the box enclosing
its pixels, so the single pixel ``(x, y)`` becomes
``box(x, y, x + 1, y + 1)``.

Author
------
wavedet developers

License
-------
MIT License
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import warnings
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

# Third-party
import numpy as np
from shapely.geometry import box
from shapely.geometry import mapping as shapely_mapping

# wavedet internal
from wavedet.image_processing.detection.fields import Fields, is_dictionary_field
from wavedet.image_processing.regions import Region2D


class Detection:
    """A single detected particle.

    Parameters
    ----------
    pixel_geometry : shapely.geometry.base.BaseGeometry
        Geometry in pixel ``(col, row)`` coordinates.
    properties : Dict[str, Any]
        Measurements keyed by data-dictionary field names.
    """

    __slots__ = ('pixel_geometry', 'properties')

    def __init__(self, pixel_geometry: Any, properties: Dict[str, Any]) -> None:
        self.pixel_geometry = pixel_geometry
        self.properties = properties

    @classmethod
    def from_region(
        cls,
        region: Region2D,
        image: np.ndarray,
        region_id: int,
        scale_level: Optional[int] = None,
        log_prob: Optional[float] = None,
    ) -> 'Detection':
        """Measure *region* on *image* and wrap it as a box detection.

        Parameters
        ----------
        region : Region2D
            Non-empty particle region.
        image : np.ndarray
            2D image the region was detected in.
        region_id : int
            Label of the region in the detector output.
        scale_level : int, optional
            Correlation level the region was selected at.
        log_prob : float, optional
            Area-normalised log tail probability of the region. Omitted
            from the properties when NaN or infinite.
        """
        x0, y0, x1, y1 = region.bbox
        cx, cy = region.centroid
        values = region.values(image).astype(np.float64)
        props: Dict[str, Any] = {
            Fields.identity.REGION_ID: int(region_id),
            Fields.physical.AREA: region.area,
            Fields.physical.CENTROID_X: cx,
            Fields.physical.CENTROID_Y: cy,
            Fields.physical.WIDTH: x1 - x0 + 1,
            Fields.physical.HEIGHT: y1 - y0 + 1,
            Fields.physical.TOUCHES_BORDER: region.touches_border(image.shape),
            Fields.intensity.MEAN: float(values.mean()),
            Fields.intensity.MAX: float(values.max()),
            Fields.intensity.INTEGRATED: float(values.sum()),
        }
        if scale_level is not None:
            props[Fields.particle.SCALE_LEVEL] = int(scale_level)
        if log_prob is not None and np.isfinite(log_prob):
            props[Fields.particle.LOG_PROBABILITY] = float(log_prob)
        return cls(box(x0, y0, x1 + 1, y1 + 1), props)

    @property
    def centroid(self) -> Tuple[float, float]:
        """``(x, y)`` centroid, from the properties when measured."""
        cx = self.properties.get(Fields.physical.CENTROID_X)
        cy = self.properties.get(Fields.physical.CENTROID_Y)
        if cx is None or cy is None:
            c = self.pixel_geometry.centroid
            return float(c.x), float(c.y)
        return float(cx), float(cy)

    def to_geojson_feature(self) -> Dict[str, Any]:
        """GeoJSON-style Feature in pixel space."""
        return {
            'type': 'Feature',
            'geometry': shapely_mapping(self.pixel_geometry),
            'properties': dict(self.properties),
        }

    def __repr__(self) -> str:
        rid = self.properties.get(Fields.identity.REGION_ID)
        area = self.properties.get(Fields.physical.AREA)
        return (f"Detection({self.pixel_geometry.geom_type}, "
                f"id={rid!r}, area={area!r})")


class DetectionSet:
    """Detections of one detector run, with run metadata.

    Parameters
    ----------
    detections : Sequence[Detection]
        Detected particles, in output order.
    detector_name : str
        Class name of the producing detector.
    detector_version : str
        ``@processor_version`` of that detector.
    output_fields : Tuple[str, ...]
        Property names every detection carries. Names outside the data
        dictionary trigger a ``UserWarning``.
    metadata : Dict[str, Any], optional
        Run settings and image information.
    """

    def __init__(
        self,
        detections: Sequence[Detection],
        detector_name: str,
        detector_version: str,
        output_fields: Tuple[str, ...] = (),
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.detections: List[Detection] = list(detections)
        self.detector_name = detector_name
        self.detector_version = detector_version
        self.output_fields = tuple(output_fields)
        self.metadata = dict(metadata) if metadata else {}

        unknown = [f for f in self.output_fields if not is_dictionary_field(f)]
        if unknown:
            warnings.warn(
                f"Fields {unknown} are not in the detection data dictionary",
                UserWarning,
                stacklevel=2,
            )

    def __len__(self) -> int:
        return len(self.detections)

    def __iter__(self) -> Iterator[Detection]:
        return iter(self.detections)

    def __getitem__(self, index: int) -> Detection:
        return self.detections[index]

    def values(self, name: str) -> np.ndarray:
        """Property *name* of every detection, NaN where missing."""
        return np.array([d.properties.get(name, np.nan) for d in self.detections],
                        dtype=np.float64)

    def centroids(self) -> np.ndarray:
        """``(N, 2)`` array of ``(x, y)`` centroids."""
        if not self.detections:
            return np.empty((0, 2), dtype=np.float64)
        return np.array([d.centroid for d in self.detections], dtype=np.float64)

    def filter_by_property(self, name: str, min_value: Optional[float] = None,
                           max_value: Optional[float] = None) -> 'DetectionSet':
        """Keep detections with ``min_value <= properties[name] <= max_value``.

        Open bounds are skipped; detections lacking the property are
        dropped.
        """
        kept = []
        for det in self.detections:
            value = det.properties.get(name)
            if value is None:
                continue
            if min_value is not None and value < min_value:
                continue
            if max_value is not None and value > max_value:
                continue
            kept.append(det)
        return DetectionSet(kept, self.detector_name, self.detector_version,
                            self.output_fields, self.metadata)

    def to_geojson(self) -> Dict[str, Any]:
        """FeatureCollection with the run metadata as collection properties."""
        properties = {
            'detector_name': self.detector_name,
            'detector_version': self.detector_version,
            'output_fields': list(self.output_fields),
        }
        properties.update(self.metadata)
        return {
            'type': 'FeatureCollection',
            'features': [d.to_geojson_feature() for d in self.detections],
            'properties': properties,
        }

    def __repr__(self) -> str:
        return (f"DetectionSet({self.detector_name} {self.detector_version}, "
                f"{len(self.detections)} detections)")
