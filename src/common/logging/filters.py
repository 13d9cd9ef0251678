import logging
from typing import Any

from colorama import Fore, Style


class ComponentFilter(logging.Filter):
    """Фильтр для добавления компонента системы в логи.

    Добавляет plain и colored версии component в запись лога.
    """

    COMPONENT_COLOR = {
        'api': Fore.BLUE,
        'catalog': Fore.GREEN,
        'storage': Fore.YELLOW,
        'database': Fore.CYAN,
    }

    def filter(self, record: Any) -> bool:
        """Добавляет информацию о компоненте в запись лога.

        Args:
            record: Запись лога

        Returns:
            True (фильтр всегда пропускает записи)

        """
        component = getattr(record, 'component', None)

        if not component or not isinstance(component, str):
            record.component_plain = 'SYSTEM'
            record.component_colored = (
                f'{Fore.MAGENTA}SYSTEM{Style.RESET_ALL}'
            )
        else:
            record.component_plain = component
            color = self.COMPONENT_COLOR.get(component, Fore.WHITE)
            record.component_colored = f'{color}{component}{Style.RESET_ALL}'

        return True
