"""Rendering subpackage.

Turns a displayed :class:`space_replay.snapshot.Snapshot` (discrete or
blended) into a Pillow image:

* A :class:`Camera` maps world coordinates to pixels and back, so clicks can
  be turned into world points for picking.
* Fade placeholders produced by interpolation are drawn with their alpha.
* The selected entity gets a ring, and a selected wormhole an arrow to its
  partner.

See :mod:`space_replay.renderer.canvas`.
"""
