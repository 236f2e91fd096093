# This file is part of the TileView project.
# Copyright (C) 2010 Omniscale <http://omniscale.de>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Thread pool for concurrent tile requests.

Tasks are started when they are submitted. The results are returned in
the order the tasks finish, a slow task does not hold back the others.
"""
import queue
import sys
import threading

import logging
log_system = logging.getLogger('tileview.system')


def _is_exc_info(result):
    return (isinstance(result, tuple) and len(result) == 3 and
            isinstance(result[1], Exception))


class ThreadWorker(threading.Thread):
    def __init__(self, task_queue, result_queue):
        threading.Thread.__init__(self)
        self.task_queue = task_queue
        self.result_queue = result_queue

    def run(self):
        while True:
            task = self.task_queue.get()
            if task is None:
                self.task_queue.task_done()
                break
            task_id, func, args = task
            try:
                result = func(*args)
            except Exception:
                result = sys.exc_info()
            self.result_queue.put((task_id, result))
            self.task_queue.task_done()


def _consume_queue(q):
    """
    Get all items from queue.
    """
    while not q.empty():
        try:
            q.get(block=False)
            q.task_done()
        except queue.Empty:
            pass


class ThreadPool(object):
    """
    Calls a function for each argument tuple in `size` worker threads.

    >>> pool = ThreadPool(2)
    >>> pool.start(pow, [(2, 2), (3, 2)])
    >>> sorted(result for _, result in pool.completed())
    [4, 9]

    The workers exit when all tasks are done, even if nobody collects
    the results. Exceptions of the called function are re-raised by
    `completed` in the caller thread. The remaining tasks are dropped
    in this case.
    """
    def __init__(self, size=4):
        self.pool_size = max(1, size)
        self.task_queue = queue.Queue()
        self.result_queue = queue.Queue()
        self.pool = []
        self.num_tasks = None

    def start(self, func, args_list):
        """
        Queue a ``func(*args)`` call for each tuple of `args_list` and
        start the worker threads.
        """
        if self.num_tasks is not None:
            raise RuntimeError('thread pool already started')
        self.num_tasks = 0
        for args in args_list:
            self.task_queue.put((self.num_tasks, func, tuple(args)))
            self.num_tasks += 1
        if self.num_tasks:
            self.pool = self._init_pool(min(self.pool_size, self.num_tasks))
        self._stop_workers()

    def completed(self):
        """
        Yield ``(task_id, result)`` for each task as soon as it is done.
        `task_id` is the position of the arguments in `args_list`.
        """
        if self.num_tasks is None:
            raise RuntimeError('thread pool not started')
        for _ in range(self.num_tasks):
            task_id, result = self.result_queue.get()
            if _is_exc_info(result):
                self.shutdown()
                exc_class, exc, tb = result
                raise exc.with_traceback(tb)
            yield task_id, result

    def shutdown(self):
        """
        Drop all queued tasks. Running tasks are finished.
        """
        _consume_queue(self.task_queue)
        self._stop_workers()

    def _stop_workers(self):
        # one sentinel per worker, queued after the tasks
        for _ in range(len(self.pool)):
            self.task_queue.put(None)

    def _init_pool(self, size):
        pool = []
        for _ in range(size):
            t = ThreadWorker(self.task_queue, self.result_queue)
            t.daemon = True
            t.start()
            pool.append(t)
        log_system.debug('started %d worker threads', len(pool))
        return pool
