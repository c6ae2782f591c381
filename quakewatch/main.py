import queue
import sys

from quakewatch.controller import TableController
from quakewatch.gui import MainView


def main():
    print("Starting EarthquakeApp...")
    ui_queue = queue.Queue()
    controller = TableController(dispatch=ui_queue.put)
    view = MainView(controller, ui_queue)
    controller.start()
    view.run()
    # Stops the poller if the loop ended some other way than closing the window
    controller.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
