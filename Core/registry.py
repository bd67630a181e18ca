"""
Live child processes started by the shell: pid -> Popen handle.

The SIGCHLD handler removes entries while the read loop may be between
any two statements, so iteration always walks a snapshot of the pids and
removal of an absent pid is a no-op.
"""


class ProcessRegistry:

    def __init__(self):
        self._children = {}

    def add(self, proc):
        """Track a freshly spawned child. Returns its pid."""
        self._children[proc.pid] = proc
        return proc.pid

    def remove(self, pid):
        """Forget a reaped child. Returns the handle or None if not tracked."""
        return self._children.pop(pid, None)

    def get(self, pid):
        return self._children.get(pid)

    def pids(self):
        return list(self._children)

    def __contains__(self, pid):
        return pid in self._children

    def __len__(self):
        return len(self._children)

    def __iter__(self):
        return iter(self.pids())

    def __repr__(self):
        return f"ProcessRegistry({self.pids()!r})"
