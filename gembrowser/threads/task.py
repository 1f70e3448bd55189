import threading


class Task:
    def __init__(self, task_code, *args):
        self.task_code = task_code
        self.args = args

    def run(self):
        self.task_code(*self.args)
        self.task_code = None
        self.args = None


class TaskRunner:
    """UI 스레드에서 실행할 태스크 큐

    워커 스레드는 schedule_task()로 태스크를 넣기만 하고,
    공유 UI 상태는 UI 스레드가 run()/run_all()로 태스크를 꺼내 실행할 때만 바뀐다.
    """

    def __init__(self):
        self.tasks = []
        self.condition = threading.Condition()

    def schedule_task(self, task):
        with self.condition:
            self.tasks.append(task)
            self.condition.notify_all()

    def pending(self) -> int:
        with self.condition:
            return len(self.tasks)

    def wait(self, timeout=None) -> bool:
        """태스크가 생길 때까지 대기"""
        with self.condition:
            if not self.tasks:
                self.condition.wait(timeout)
            return bool(self.tasks)

    def run(self) -> bool:
        task = None
        with self.condition:
            if self.tasks:
                task = self.tasks.pop(0)

        if task:
            task.run()
            return True
        return False

    def run_all(self) -> int:
        """쌓인 태스크를 모두 실행 (실행 중 새로 들어온 것 포함)"""
        count = 0
        while self.run():
            count += 1
        return count
