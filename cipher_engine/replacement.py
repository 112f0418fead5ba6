from cipher_engine.charset import upper


class ReplacementMap:
    """
    Partial one-to-one symbol mapping used by the substitution tools.

    Assigning a target that is already taken by another source clears the
    old source first, so two sources never share a target.  Unmapped
    sources are simply absent.
    """

    def __init__(self, mapping=None):
        self._map = {}
        for source, target in (mapping or {}).items():
            self.assign(source, target)

    def assign(self, source, target):
        """Map `source` to `target` (empty target clears).  True when changed."""
        source = upper(source)
        target = upper(target or "")
        changed = False
        if target:
            for other in [s for s, t in self._map.items() if t == target and s != source]:
                del self._map[other]
                changed = True
        if not target:
            if source in self._map:
                del self._map[source]
                changed = True
            return changed
        if self._map.get(source) != target:
            self._map[source] = target
            changed = True
        return changed

    def clear(self, source):
        return self.assign(source, "")

    def get(self, source, default=None):
        return self._map.get(upper(source), default)

    def __getitem__(self, source):
        return self._map[upper(source)]

    def __contains__(self, source):
        return upper(source) in self._map

    def __iter__(self):
        return iter(self._map)

    def __len__(self):
        return len(self._map)

    def __eq__(self, other):
        if isinstance(other, ReplacementMap):
            return self._map == other._map
        if isinstance(other, dict):
            return self._map == other
        return NotImplemented

    def __repr__(self):
        return f"ReplacementMap({self._map!r})"

    def items(self):
        return self._map.items()

    def targets(self):
        """Every target currently in use."""
        return set(self._map.values())

    def reverse(self):
        return ReplacementMap({t: s for s, t in self._map.items()})

    def copy(self):
        return ReplacementMap(self._map)

    def to_dict(self):
        return dict(self._map)
