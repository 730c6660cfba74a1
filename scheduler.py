"""
Планировщик для игрового цикла.

Вместо setInterval / setTimeout: задачи опрашиваются из главного цикла
pygame (или из тестов) с текущим временем в миллисекундах.
Часы передаются снаружи, чтобы в тестах время можно было двигать руками.
"""


class PeriodicTask:
    """Повторяющаяся задача, которую можно остановить и перезапустить"""

    def __init__(self, callback, interval_ms):
        self.callback = callback
        self.interval_ms = interval_ms
        self.next_due = None

    @property
    def active(self):
        return self.next_due is not None

    def start(self, now):
        self.next_due = now + self.interval_ms

    def stop(self):
        self.next_due = None

    def reschedule(self, interval_ms, now):
        self.interval_ms = interval_ms
        self.start(now)

    def run_pending(self, now):
        """Вызывает callback не больше одного раза за опрос"""
        if self.next_due is None or now < self.next_due:
            return False

        self.next_due += self.interval_ms
        if self.next_due <= now:
            # Отстали (окно тормозило) - не догоняем пачкой тиков
            self.next_due = now + self.interval_ms
        self.callback()
        return True


class DelayedCall:
    """Одноразовый вызов через заданное время"""

    def __init__(self, callback, due):
        self.callback = callback
        self.due = due
        self.cancelled = False
        self.done = False

    def cancel(self):
        self.cancelled = True

    def run_pending(self, now):
        if self.cancelled or self.done or now < self.due:
            return False
        self.done = True
        self.callback()
        return True


class Scheduler:
    def __init__(self, clock):
        self.clock = clock
        self.tasks = []
        self.calls = []

    def now(self):
        return self.clock()

    def every(self, interval_ms, callback):
        """Создать периодическую задачу (не запущенную)"""
        task = PeriodicTask(callback, interval_ms)
        self.tasks.append(task)
        return task

    def call_later(self, delay_ms, callback):
        call = DelayedCall(callback, self.now() + delay_ms)
        self.calls.append(call)
        return call

    def run_pending(self):
        now = self.now()
        for task in list(self.tasks):
            task.run_pending(now)
        for call in list(self.calls):
            call.run_pending(now)
        self.calls = [c for c in self.calls if not (c.done or c.cancelled)]
