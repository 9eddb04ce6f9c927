# main.py
import argparse
import time

from building_config import BuildingConfig, NUM_ELEVATORS, NUM_FLOORS
from elevator_system import ElevatorSystem
from event_log import configure_logging
from request import Direction


def run_console_demo(system: ElevatorSystem, duration: float):
    """无界面模式：按固定脚本提交几条请求后运行一段时间"""
    system.start()
    try:
        time.sleep(2)
        system.submit_external_call(5, Direction.UP)
        system.submit_external_call(8, Direction.DOWN)
        system.submit_internal_request(10, 0)

        time.sleep(3)
        system.submit_external_call(3, Direction.UP)
        system.submit_internal_request(15, min(1, system.config.elevators - 1))

        time.sleep(duration)
    finally:
        system.stop()


def main():
    parser = argparse.ArgumentParser(description="Multi-elevator dispatch simulator")
    parser.add_argument("--nogui", action="store_true", help="run the scripted console demo")
    parser.add_argument("--floors", type=int, default=NUM_FLOORS)
    parser.add_argument("--elevators", type=int, default=NUM_ELEVATORS)
    parser.add_argument("--duration", type=float, default=30.0,
                        help="seconds to keep the console demo running")
    parser.add_argument("--log-file", default="elevator_log.txt")
    args = parser.parse_args()

    configure_logging(args.log_file)
    system = ElevatorSystem(BuildingConfig(floors=args.floors, elevators=args.elevators))

    if args.nogui:
        run_console_demo(system, args.duration)
        return

    # 界面模块依赖 gradio，只在界面模式下导入
    from gui.elevator_state import ElevatorStateView
    from gui.elevator_ui import create_ui

    view = ElevatorStateView(system)
    system.start()
    ui = create_ui(view)
    try:
        ui.launch()
    finally:
        # UI 关闭后安全关闭电梯线程
        view.shutdown()


if __name__ == "__main__":
    main()
