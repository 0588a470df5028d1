from .employee import EmployeeCreate, EmployeeUpdate, EmployeeOut
from .user import UserCreate, UserLogin, UserOut, AuthOut, MeOut
from .task import TaskCreate, TaskUpdate, TaskStatusUpdate, TaskOut
from .dashboard import DashboardOut, EmployeeTaskCount
